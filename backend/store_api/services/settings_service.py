"""
NeoLayer Store API — Settings Service
======================================

What:  The single store settings document (`_id: "store"`).
How:   - ensure_default_settings(): startup bootstrap, insert the default if missing
       - get_settings(): read path; runs the same bootstrap so a missing
         document is recreated and persisted, never just synthesized
       - update_theme(): upsert theme + updatedAt

Document:
    {"_id": "store", "theme": "default", "updatedAt": datetime}
"""

import logging
from typing import Any, Dict

from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError

from store_api.documents import serialize_document, utcnow
from store_api.exceptions import ValidationError
from store_api.services.storage import storage_operation

logger = logging.getLogger(__name__)

SETTINGS_ID = "store"
DEFAULT_THEME = "default"


class SettingsService:
    """Operations on the store settings document."""

    @storage_operation("initializing settings")
    async def ensure_default_settings(self, collection: AsyncCollection) -> Dict[str, Any]:
        """
        Return the settings document, inserting the default first if absent.

        Idempotent. Two concurrent callers may both see the document missing;
        the loser of the insert race gets DuplicateKeyError and re-reads.
        """
        existing = await collection.find_one({"_id": SETTINGS_ID})
        if existing is not None:
            return existing

        default = {"_id": SETTINGS_ID, "theme": DEFAULT_THEME}
        try:
            await collection.insert_one(dict(default))
            logger.info("Default store settings created (theme=%s)", DEFAULT_THEME)
        except DuplicateKeyError:
            existing = await collection.find_one({"_id": SETTINGS_ID})
            if existing is not None:
                return existing
        return default

    async def get_settings(self, collection: AsyncCollection) -> Dict[str, Any]:
        doc = await self.ensure_default_settings(collection)
        return serialize_document(doc)

    @storage_operation("updating theme")
    async def update_theme(self, collection: AsyncCollection, theme: Any) -> str:
        """
        Upsert the theme.

        Raises:
            ValidationError: theme missing, empty or not a string
        """
        if not theme:
            raise ValidationError(message="Theme is required", field="theme")
        if not isinstance(theme, str):
            raise ValidationError(
                message="Theme must be a string",
                field="theme",
                context={"value": repr(theme)},
            )

        await collection.update_one(
            {"_id": SETTINGS_ID},
            {"$set": {"theme": theme, "updatedAt": utcnow()}},
            upsert=True,
        )
        logger.info("Store theme updated to %r", theme)
        return theme


settings_service = SettingsService()
