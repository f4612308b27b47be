"""
NeoLayer Store API — Product Service
=====================================

What:  List, create, partially update and delete catalogue products.
Who:   Called by the /api/products route handlers.

Validation rules (kept deliberately shallow):
    create: name and description must be truthy, price must be present
            (0 is fine, missing or null is not); price goes through float().
    update: name/description/emoji apply only when truthy, price only when
            present. An empty string therefore cannot clear a text field.

Stored document:
    {"_id": ObjectId, "name": str, "description": str, "price": float,
     "emoji": str, "createdAt": datetime}
"""

import logging
import math
from typing import Any, Dict, List

from pymongo.asynchronous.collection import AsyncCollection

from store_api.documents import parse_object_id, serialize_document, serialize_documents, utcnow
from store_api.exceptions import NotFoundError, ValidationError
from store_api.services.storage import storage_operation

logger = logging.getLogger(__name__)

DEFAULT_EMOJI = "🎨"
REQUIRED_FIELDS = ("name", "description", "price")


def coerce_price(value: Any) -> float:
    """float() the incoming price; strings such as "9.99" are accepted."""
    if isinstance(value, bool):
        raise ValidationError(message="Price must be a number", field="price")
    try:
        price = float(value)
    except (TypeError, ValueError, OverflowError):
        price = math.nan
    # NaN and infinity cannot be rendered as JSON
    if not math.isfinite(price):
        raise ValidationError(
            message="Price must be a number",
            field="price",
            context={"value": str(value)},
        )
    return price


class ProductService:
    """
    Stateless product operations; the collection is passed on every call.
    """

    @storage_operation("fetching products")
    async def list_products(self, collection: AsyncCollection) -> List[Dict[str, Any]]:
        """Every product, in the order MongoDB returns them."""
        docs = await collection.find({}).to_list()
        return serialize_documents(docs or [])

    @storage_operation("creating product")
    async def create_product(
        self, collection: AsyncCollection, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Validate, build and insert a new product.

        Raises:
            ValidationError: a required field is missing or price is not numeric
        """
        missing = [
            field for field in REQUIRED_FIELDS
            if (payload.get(field) is None if field == "price" else not payload.get(field))
        ]
        if missing:
            raise ValidationError(
                message=f"Missing required fields: {', '.join(missing)}",
                missing_fields=missing,
            )

        product = {
            "name": payload["name"],
            "description": payload["description"],
            "price": coerce_price(payload["price"]),
            "emoji": payload.get("emoji") or DEFAULT_EMOJI,
            "createdAt": utcnow(),
        }
        result = await collection.insert_one(product)
        product["_id"] = result.inserted_id
        logger.info("Product created: %s (%s)", result.inserted_id, product["name"])
        return serialize_document(product)

    @storage_operation("updating product")
    async def update_product(
        self, collection: AsyncCollection, product_id: str, payload: Dict[str, Any]
    ) -> None:
        """
        Apply the present fields of `payload` to one product.

        Raises:
            ValidationError: malformed id or non-numeric price
            NotFoundError: no product has this id
        """
        oid = parse_object_id(product_id, "product")

        update: Dict[str, Any] = {}
        for field in ("name", "description", "emoji"):
            if payload.get(field):
                update[field] = payload[field]
        if payload.get("price") is not None:
            update["price"] = coerce_price(payload["price"])

        if not update:
            # $set with an empty document is rejected by MongoDB
            if await collection.find_one({"_id": oid}, projection={"_id": 1}) is None:
                raise NotFoundError(resource="product", resource_id=product_id)
            return

        result = await collection.update_one({"_id": oid}, {"$set": update})
        if result.matched_count == 0:
            raise NotFoundError(resource="product", resource_id=product_id)
        logger.info("Product %s updated: %s", product_id, sorted(update))

    @storage_operation("deleting product")
    async def delete_product(self, collection: AsyncCollection, product_id: str) -> None:
        oid = parse_object_id(product_id, "product")
        result = await collection.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise NotFoundError(resource="product", resource_id=product_id)
        logger.info("Product %s deleted", product_id)


product_service = ProductService()
