"""
NeoLayer Store API — Order Route Handlers
==========================================

What:  POST/GET /api/orders, GET /api/orders/status/{status},
       PUT /api/orders/{id}/status, DELETE /api/orders/{id}.
How:   Delegates to OrderService with the orders collection from the
       injected StoreContext.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends

from store_api.database import StoreContext, get_store
from store_api.schemas.store import ErrorResponse, MessageResponse
from store_api.services.order_service import order_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Orders"])


@router.post(
    "/orders",
    status_code=201,
    response_model=Dict[str, Any],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Create an order",
    description="The JSON body is stored as the order, unchanged, with a new id.",
)
async def create_order(
    payload: Dict[str, Any] = Body(...),
    store: StoreContext = Depends(get_store),
) -> Dict[str, Any]:
    return await order_service.create_order(store.orders, payload)


@router.get(
    "/orders",
    response_model=List[Dict[str, Any]],
    responses={500: {"model": ErrorResponse}},
    summary="List orders, newest first",
)
async def list_orders(store: StoreContext = Depends(get_store)) -> List[Dict[str, Any]]:
    return await order_service.list_orders(store.orders)


@router.get(
    "/orders/status/{status}",
    response_model=List[Dict[str, Any]],
    responses={500: {"model": ErrorResponse}},
    summary="List orders with a given status",
)
async def list_orders_by_status(
    status: str,
    store: StoreContext = Depends(get_store),
) -> List[Dict[str, Any]]:
    return await order_service.list_orders_by_status(store.orders, status)


@router.put(
    "/orders/{order_id}/status",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Set an order's status",
)
async def update_order_status(
    order_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    store: StoreContext = Depends(get_store),
) -> MessageResponse:
    await order_service.update_order_status(store.orders, order_id, (payload or {}).get("status"))
    return MessageResponse(message="Order status updated")


@router.delete(
    "/orders/{order_id}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Delete an order",
)
async def delete_order(
    order_id: str,
    store: StoreContext = Depends(get_store),
) -> MessageResponse:
    await order_service.delete_order(store.orders, order_id)
    return MessageResponse(message="Order deleted")
