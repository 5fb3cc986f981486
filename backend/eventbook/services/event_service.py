"""
Event service handling the event store operations bookings depend on.
"""

from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from eventbook.core.exceptions import EventNotFoundError
from eventbook.core.logging import get_logger
from eventbook.models.common import try_object_id, utcnow
from eventbook.models.event import EVENT_MODEL, Event
from eventbook.schemas.event import EventCreate

logger = get_logger(__name__)


def _events(db: AsyncIOMotorDatabase):
    return db[EVENT_MODEL.collection]


async def create_event(db: AsyncIOMotorDatabase, event_data: EventCreate) -> Event:
    now = utcnow()
    event = Event(**event_data.model_dump(), created_at=now, updated_at=now)
    result = await _events(db).insert_one(event.to_document())
    event.id = result.inserted_id

    logger.info("event_created", event_id=str(event.id), title=event.title)
    return event


async def find_event_by_id(db: AsyncIOMotorDatabase, event_id: Any) -> Optional[dict]:
    """Look an event up by id. Returns None when absent or the id is malformed."""
    oid = try_object_id(event_id)
    if oid is None:
        return None
    return await _events(db).find_one({"_id": oid})


async def get_event(db: AsyncIOMotorDatabase, event_id: Any) -> Event:
    document = await find_event_by_id(db, event_id)
    if document is None:
        raise EventNotFoundError(event_id)
    return Event.from_document(document)


async def delete_event(db: AsyncIOMotorDatabase, event_id: Any) -> None:
    """Delete an event. Existing bookings that point at it are left alone."""
    oid = try_object_id(event_id)
    result = None
    if oid is not None:
        result = await _events(db).delete_one({"_id": oid})
    if result is None or result.deleted_count == 0:
        raise EventNotFoundError(event_id)
    logger.info("event_deleted", event_id=str(oid))
