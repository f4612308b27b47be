"""
NeoLayer Store API — Settings Route Handlers
=============================================

What:  GET /api/settings and PUT /api/settings/theme.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from store_api.database import StoreContext, get_store
from store_api.schemas.store import ErrorResponse, ThemeUpdateResponse
from store_api.services.settings_service import settings_service

router = APIRouter(prefix="/api", tags=["Settings"])


@router.get(
    "/settings",
    response_model=Dict[str, Any],
    responses={500: {"model": ErrorResponse}},
    summary="Read store settings",
)
async def get_settings(store: StoreContext = Depends(get_store)) -> Dict[str, Any]:
    return await settings_service.get_settings(store.settings)


@router.put(
    "/settings/theme",
    response_model=ThemeUpdateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Set the store theme",
    description="Creates the settings document if it does not exist.",
)
async def update_theme(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    store: StoreContext = Depends(get_store),
) -> ThemeUpdateResponse:
    theme = await settings_service.update_theme(store.settings, (payload or {}).get("theme"))
    return ThemeUpdateResponse(message="Theme updated successfully", theme=theme)
