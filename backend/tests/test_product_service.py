"""
NeoLayer Store API — Product Service Unit Tests
================================================

What we test:
    ✅ Create: price coercion, emoji default, missing-field reporting
    ✅ Update: partial updates leave other fields untouched, quirks of truthiness
    ✅ Delete: 400 for malformed ids, 404 for unmatched ids
    ✅ Driver failures surface as StorageError
"""

import pytest
from bson import ObjectId

from store_api.exceptions import NotFoundError, StorageError, ValidationError
from store_api.services.product_service import DEFAULT_EMOJI, ProductService, coerce_price


class TestCoercePrice:
    """Tests for turning incoming prices into floats."""

    def test_string_price(self):
        """Numeric strings should be parsed."""
        assert coerce_price("9.99") == 9.99

    def test_integer_price(self):
        """Integers should come back as floats."""
        assert coerce_price(12) == 12.0
        assert isinstance(coerce_price(12), float)

    def test_zero_price(self):
        """Zero is a valid price."""
        assert coerce_price(0) == 0.0

    def test_non_numeric_price_rejected(self):
        """Words are not prices."""
        with pytest.raises(ValidationError, match="Price must be a number"):
            coerce_price("cheap")

    @pytest.mark.parametrize("value", ["nan", "inf", float("-inf")])
    def test_non_finite_price_rejected(self, value):
        """NaN and infinity cannot be stored or rendered as JSON."""
        with pytest.raises(ValidationError):
            coerce_price(value)

    @pytest.mark.parametrize("value", [10**400, -(10**400)])
    def test_integer_beyond_float_range_rejected(self, value):
        """Integers too large for a float should be a validation error, not a crash."""
        with pytest.raises(ValidationError, match="Price must be a number"):
            coerce_price(value)

    def test_boolean_price_rejected(self):
        """Booleans are not accepted even though float(True) works."""
        with pytest.raises(ValidationError):
            coerce_price(True)


class TestProductCreate:
    """Tests for create_product."""

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_create_coerces_price_and_defaults_emoji(self, fake_store, sample_product_payload):
        """A string price becomes a float and the placeholder emoji is filled in."""
        product = await self.service.create_product(fake_store.products, sample_product_payload)

        assert product["price"] == 9.99
        assert isinstance(product["price"], float)
        assert product["emoji"] == DEFAULT_EMOJI
        assert ObjectId.is_valid(product["_id"])
        assert "createdAt" in product
        assert len(fake_store.products.docs) == 1

    @pytest.mark.asyncio
    async def test_create_keeps_supplied_emoji(self, fake_store):
        """A supplied emoji is stored as given."""
        product = await self.service.create_product(
            fake_store.products,
            {"name": "Lamp", "description": "Desk lamp", "price": 25, "emoji": "💡"},
        )
        assert product["emoji"] == "💡"
        assert product["price"] == 25.0

    @pytest.mark.asyncio
    async def test_create_allows_zero_price(self, fake_store):
        """Price 0 counts as present."""
        product = await self.service.create_product(
            fake_store.products, {"name": "Sticker", "description": "Free", "price": 0}
        )
        assert product["price"] == 0.0

    @pytest.mark.asyncio
    async def test_create_lists_missing_fields(self, fake_store):
        """Every missing required field is reported and nothing is inserted."""
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_product(fake_store.products, {"description": "No name"})

        assert exc_info.value.missing_fields == ["name", "price"]
        assert fake_store.products.docs == []

    @pytest.mark.asyncio
    async def test_create_treats_empty_name_as_missing(self, fake_store):
        """An empty name is treated as missing."""
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_product(
                fake_store.products, {"name": "", "description": "x", "price": 1}
            )
        assert exc_info.value.missing_fields == ["name"]

    @pytest.mark.asyncio
    async def test_create_storage_failure(self, failing_collection, sample_product_payload):
        """Driver errors should surface as StorageError with the driver message."""
        with pytest.raises(StorageError, match="connection refused"):
            await self.service.create_product(failing_collection, sample_product_payload)


class TestProductUpdate:
    """Tests for partial product updates."""

    def setup_method(self):
        self.service = ProductService()

    async def _create(self, store):
        return await self.service.create_product(
            store.products,
            {"name": "Mug", "description": "Ceramic", "price": 9.99, "emoji": "☕"},
        )

    @pytest.mark.asyncio
    async def test_price_only_update_leaves_other_fields(self, fake_store):
        """Updating the price must not touch name, description or emoji."""
        created = await self._create(fake_store)

        await self.service.update_product(fake_store.products, created["_id"], {"price": "12.5"})

        stored = fake_store.products.docs[0]
        assert stored["price"] == 12.5
        assert stored["name"] == "Mug"
        assert stored["description"] == "Ceramic"
        assert stored["emoji"] == "☕"

    @pytest.mark.asyncio
    async def test_empty_strings_do_not_clear_fields(self, fake_store):
        """Empty text values are skipped, so they cannot clear a field."""
        created = await self._create(fake_store)

        await self.service.update_product(
            fake_store.products, created["_id"], {"name": "", "emoji": "", "description": "Stoneware"}
        )

        stored = fake_store.products.docs[0]
        assert stored["name"] == "Mug"
        assert stored["emoji"] == "☕"
        assert stored["description"] == "Stoneware"

    @pytest.mark.asyncio
    async def test_update_unknown_id_raises_not_found(self, fake_store):
        """A well-formed id with no product should raise NotFoundError."""
        with pytest.raises(NotFoundError):
            await self.service.update_product(
                fake_store.products, str(ObjectId()), {"name": "Ghost"}
            )

    @pytest.mark.asyncio
    async def test_update_without_fields_checks_existence(self, fake_store):
        """An empty update succeeds for existing products and 404s otherwise."""
        created = await self._create(fake_store)
        await self.service.update_product(fake_store.products, created["_id"], {})

        with pytest.raises(NotFoundError):
            await self.service.update_product(fake_store.products, str(ObjectId()), {})

    @pytest.mark.asyncio
    async def test_update_malformed_id(self, fake_store):
        """A malformed id is a validation error."""
        with pytest.raises(ValidationError, match="Invalid product ID"):
            await self.service.update_product(fake_store.products, "not-an-id", {"name": "x"})


class TestProductDeleteAndList:
    """Tests for listing and deleting products."""

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_list_empty(self, fake_store):
        """An empty collection lists as an empty array."""
        assert await self.service.list_products(fake_store.products) == []

    @pytest.mark.asyncio
    async def test_delete_then_list(self, fake_store, sample_product_payload):
        """A deleted product no longer appears in the list."""
        created = await self.service.create_product(fake_store.products, sample_product_payload)

        await self.service.delete_product(fake_store.products, created["_id"])

        assert await self.service.list_products(fake_store.products) == []

    @pytest.mark.asyncio
    async def test_delete_unmatched_id_is_not_found(self, fake_store):
        """Deleting a well-formed unknown id raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await self.service.delete_product(fake_store.products, str(ObjectId()))

    @pytest.mark.asyncio
    async def test_delete_malformed_id_is_validation_error(self, fake_store):
        """Deleting a malformed id raises ValidationError, never NotFoundError."""
        with pytest.raises(ValidationError):
            await self.service.delete_product(fake_store.products, "12345")

    @pytest.mark.asyncio
    async def test_list_storage_failure(self, failing_collection):
        """A failing query surfaces as StorageError."""
        with pytest.raises(StorageError):
            await self.service.list_products(failing_collection)
