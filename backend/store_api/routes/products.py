"""
NeoLayer Store API — Product Route Handlers
============================================

What:  GET/POST /api/products, PUT/DELETE /api/products/{id}.
How:   Thin handlers: pull the products collection from the injected
       StoreContext, delegate to ProductService, shape the HTTP response.
       Errors raised by the service are mapped by the global handlers.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends

from store_api.database import StoreContext, get_store
from store_api.schemas.store import ErrorResponse, MessageResponse
from store_api.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])


@router.get(
    "/products",
    response_model=List[Dict[str, Any]],
    responses={500: {"model": ErrorResponse}},
    summary="List all products",
)
async def list_products(store: StoreContext = Depends(get_store)) -> List[Dict[str, Any]]:
    return await product_service.list_products(store.products)


@router.post(
    "/products",
    status_code=201,
    response_model=Dict[str, Any],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Create a product",
    description=(
        "Requires name, description and price. Price is coerced to a number; "
        "emoji defaults to a placeholder glyph."
    ),
)
async def create_product(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    store: StoreContext = Depends(get_store),
) -> Dict[str, Any]:
    return await product_service.create_product(store.products, payload or {})


@router.put(
    "/products/{product_id}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Partially update a product",
)
async def update_product(
    product_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    store: StoreContext = Depends(get_store),
) -> MessageResponse:
    await product_service.update_product(store.products, product_id, payload or {})
    return MessageResponse(message="Product updated successfully")


@router.delete(
    "/products/{product_id}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    store: StoreContext = Depends(get_store),
) -> MessageResponse:
    await product_service.delete_product(store.products, product_id)
    return MessageResponse(message="Product deleted successfully")
