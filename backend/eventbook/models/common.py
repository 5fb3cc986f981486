"""
Helpers shared by the document models: identifiers and timestamps.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId


def parse_object_id(value: Any) -> ObjectId:
    """Coerce a string or ObjectId to ObjectId. Raises ValueError otherwise."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise ValueError(f"{value!r} is not a valid ObjectId") from e


def try_object_id(value: Any) -> Optional[ObjectId]:
    try:
        return parse_object_id(value)
    except ValueError:
        return None


def utcnow() -> datetime:
    """Current UTC time truncated to the milliseconds BSON dates can hold."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)
