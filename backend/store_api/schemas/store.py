"""
NeoLayer Store API — Pydantic Response Schemas
===============================================

What:  Pydantic models for the fixed-shape responses of the API.
Why:   Serialization and OpenAPI docs for confirmations, errors and health.

Product, order and settings bodies are documents, not schemas: they are
returned as serialized MongoDB documents (see store_api.documents) and
request bodies arrive as plain JSON objects validated by the services.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Confirmation returned by update and delete endpoints."""
    message: str = Field(description="Human-readable confirmation")


class ThemeUpdateResponse(MessageResponse):
    """Returned by PUT /api/settings/theme."""
    theme: str = Field(description="The theme now stored")


class ErrorResponse(BaseModel):
    """
    Standardized error body for every failed request.

    Example:
        {
            "error": "not_found",
            "message": "Product not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Liveness check body. The check itself always answers 200."""
    status: str = Field(description="Always 'Server is running'")
    version: str = Field(description="Application version")
    database: str = Field(description="Database reachability: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
