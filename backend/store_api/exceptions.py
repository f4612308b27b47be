"""
NeoLayer Store API — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the store's error scenarios.
Why:   Services raise typed errors; one set of global handlers (main.py)
       turns them into JSON responses with the right HTTP status code.
How:   Each exception carries a message and an optional context dict.
Who:   Raised by services, the storage connector and route dependencies.

Exception Hierarchy:
    StoreError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── StorageUnavailableError  → 500 (collections not ready / connect failed)
    └── StorageError             → 500 (query or write failed)
"""

from typing import Any, Dict, List, Optional


class StoreError(Exception):
    """
    Base exception for all store application errors.

    Attributes:
        message:  Error description returned in the API response
        context:  Additional debug info (logged, and returned as `details`
                  only for validation errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StoreError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, malformed identifiers, non-numeric price.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Missing required fields: name, price",
            "details": {"missing_fields": ["name", "price"]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        missing_fields: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if missing_fields:
            ctx["missing_fields"] = list(missing_fields)
        super().__init__(message=message, context=ctx)
        self.field = field
        self.missing_fields = list(missing_fields or [])


class NotFoundError(StoreError):
    """
    Raised when no document matches a well-formed identifier.

    HTTP:    404 Not Found

    pymongo reports a miss through matched_count/deleted_count == 0 rather
    than an exception; services convert that into this error.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StorageUnavailableError(StoreError):
    """
    Raised when the collection handles are not ready.

    When:    A request arrives before the startup phase produced a StoreContext,
             or the initial connection attempt failed.
    HTTP:    500 Internal Server Error
    Startup: Fatal. The lifespan re-raises it and uvicorn exits non-zero.
    """

    def __init__(
        self,
        message: str = "Database not connected",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(StoreError):
    """
    Raised when a MongoDB query or write fails.

    HTTP:    500 Internal Server Error
    The message carries the driver's own error text; nothing is retried.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
