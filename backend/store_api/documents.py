"""
NeoLayer Store API — Document Helpers
======================================

What:  Small helpers shared by every service that touches MongoDB documents.
How:   - parse_object_id(): path segment → bson.ObjectId (400 on bad format)
       - serialize_document(): BSON document → JSON-safe dict (`_id` kept, stringified)
       - utcnow(): timezone-aware timestamp for createdAt/updatedAt

Serialized shape:
    {"_id": ObjectId("65f..."), "createdAt": datetime(...)}
    → {"_id": "65f...", "createdAt": "2024-03-14T10:00:00+00:00"}
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List

from bson import ObjectId

from store_api.exceptions import ValidationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_object_id(value: str, resource: str = "resource") -> ObjectId:
    """
    Convert a path identifier into an ObjectId.

    Malformed identifiers are rejected here, before any storage call, so a
    bad id always yields 400 and never 404.
    """
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise ValidationError(
            message=f"Invalid {resource} ID",
            field="id",
            context={"value": str(value)},
        )
    return ObjectId(value)


def _to_json_safe(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json_safe(v) for v in value]
    return value


def serialize_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Make every value JSON-safe; `_id` keeps its key, ObjectIds become hex strings."""
    if not doc:
        return doc
    return _to_json_safe(dict(doc))


def serialize_documents(docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_document(d) for d in docs]
