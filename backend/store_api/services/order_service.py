"""
NeoLayer Store API — Order Service
===================================

What:  Create, list, filter, update status and delete customer orders.
Who:   Called by the /api/orders route handlers.

Orders are schema-less: the storefront posts whatever it needs
(customerName, items, total, status, createdAt, ...) and the body is
stored verbatim. The only server-written field is `updatedAt`, stamped
when the status changes.

Listing sorts by `createdAt` descending. The field is caller-supplied, so
the order is whatever MongoDB's comparison of the stored values gives;
documents without it sort last.
"""

import logging
from typing import Any, Dict, List

from pymongo import DESCENDING
from pymongo.asynchronous.collection import AsyncCollection

from store_api.documents import parse_object_id, serialize_document, serialize_documents, utcnow
from store_api.exceptions import NotFoundError, ValidationError
from store_api.services.storage import storage_operation

logger = logging.getLogger(__name__)

SORT_FIELD = "createdAt"


class OrderService:
    """Stateless order operations; the collection is passed on every call."""

    @storage_operation("creating order")
    async def create_order(
        self, collection: AsyncCollection, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Persist the payload as-is and return it with its new id."""
        order = dict(payload)
        result = await collection.insert_one(order)
        order["_id"] = result.inserted_id
        logger.info(
            "New order received: %s - Order ID: %s",
            order.get("customerName"),
            result.inserted_id,
        )
        return serialize_document(order)

    @storage_operation("fetching orders")
    async def list_orders(self, collection: AsyncCollection) -> List[Dict[str, Any]]:
        """All orders, newest first."""
        docs = await collection.find({}).sort(SORT_FIELD, DESCENDING).to_list()
        return serialize_documents(docs or [])

    @storage_operation("fetching orders by status")
    async def list_orders_by_status(
        self, collection: AsyncCollection, status: str
    ) -> List[Dict[str, Any]]:
        """Exact-match status filter; an unknown status yields []."""
        docs = await collection.find({"status": status}).sort(SORT_FIELD, DESCENDING).to_list()
        return serialize_documents(docs or [])

    @storage_operation("updating order status")
    async def update_order_status(
        self, collection: AsyncCollection, order_id: str, status: Any
    ) -> None:
        """
        Set `status` and `updatedAt` on one order.

        Raises:
            ValidationError: malformed id, or no status supplied
            NotFoundError: no order has this id
        """
        oid = parse_object_id(order_id, "order")
        if status is None:
            raise ValidationError(
                message="Missing required fields: status",
                missing_fields=["status"],
            )

        result = await collection.update_one(
            {"_id": oid},
            {"$set": {"status": status, "updatedAt": utcnow()}},
        )
        if result.matched_count == 0:
            raise NotFoundError(resource="order", resource_id=order_id)
        logger.info("Order %s status set to %r", order_id, status)

    @storage_operation("deleting order")
    async def delete_order(self, collection: AsyncCollection, order_id: str) -> None:
        oid = parse_object_id(order_id, "order")
        result = await collection.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise NotFoundError(resource="order", resource_id=order_id)
        logger.info("Order %s deleted", order_id)


order_service = OrderService()
