"""
Booking service: validated writes with an event reference check.

WRITE PATH
==========

Every insert and update goes through the same three steps:

  1. validate_booking_fields()   pure; trims/lowercases email, parses eventId
  2. ensure_event_exists()       looks the event up, but only when eventId is
                                 new (insert) or changed (update)
  3. the write itself            createdAt/updatedAt are set here

The reference check is application-level and not transactional: an event
deleted between step 2 and step 3, or after the booking exists, is not
detected. Updates that leave eventId alone therefore succeed even if the
event is gone.
"""

from typing import Any, Mapping

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from eventbook.core.exceptions import (
    BookingNotFoundError,
    EventLookupError,
    EventNotFoundError,
)
from eventbook.core.logging import get_logger
from eventbook.models.booking import BOOKING_MODEL, Booking, validate_booking_fields
from eventbook.models.common import try_object_id, utcnow
from eventbook.services.event_service import find_event_by_id

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("eventId", "email")


def _bookings(db: AsyncIOMotorDatabase):
    return db[BOOKING_MODEL.collection]


async def ensure_event_exists(db: AsyncIOMotorDatabase, event_id: ObjectId) -> None:
    """
    Pre-write check that the referenced event exists.

    Raises EventNotFoundError if it does not, and EventLookupError if the
    lookup itself fails.
    """
    try:
        event = await find_event_by_id(db, event_id)
    except Exception as e:
        logger.error("booking_event_lookup_failed", event_id=str(event_id), error=str(e))
        raise EventLookupError(event_id, e) from e

    if event is None:
        logger.warning("booking_event_missing", event_id=str(event_id))
        raise EventNotFoundError(
            event_id,
            f"Event with ID {event_id} does not exist. Cannot create booking.",
        )


async def create_booking(db: AsyncIOMotorDatabase, data: Mapping[str, Any]) -> Booking:
    fields = validate_booking_fields(data)
    await ensure_event_exists(db, fields.event_id)

    now = utcnow()
    booking = Booking(
        event_id=fields.event_id,
        email=fields.email,
        created_at=now,
        updated_at=now,
    )
    result = await _bookings(db).insert_one(booking.to_document())
    booking.id = result.inserted_id

    logger.info("booking_created", booking_id=str(booking.id), event_id=str(booking.event_id))
    return booking


async def get_booking(db: AsyncIOMotorDatabase, booking_id: Any) -> Booking:
    oid = try_object_id(booking_id)
    document = None
    if oid is not None:
        document = await _bookings(db).find_one({"_id": oid})
    if document is None:
        raise BookingNotFoundError(booking_id)
    return Booking.from_document(document)


async def update_booking(
    db: AsyncIOMotorDatabase,
    booking_id: Any,
    changes: Mapping[str, Any],
) -> Booking:
    """
    Apply ``changes`` (keys ``eventId`` and/or ``email``) to a booking.

    The event reference is re-checked only when eventId actually changes.
    """
    current = await get_booking(db, booking_id)

    merged = {"eventId": current.event_id, "email": current.email}
    merged.update({k: v for k, v in changes.items() if k in UPDATABLE_FIELDS})
    fields = validate_booking_fields(merged)

    updates = {}
    if fields.event_id != current.event_id:
        await ensure_event_exists(db, fields.event_id)
        updates["eventId"] = fields.event_id
    if fields.email != current.email:
        updates["email"] = fields.email

    # Nothing modified: leave the document and its updatedAt alone
    if not updates:
        return current

    updated_at = utcnow()
    await _bookings(db).update_one(
        {"_id": current.id},
        {"$set": {**updates, "updatedAt": updated_at}},
    )

    booking = current.model_copy(
        update={
            "event_id": fields.event_id,
            "email": fields.email,
            "updated_at": updated_at,
        }
    )
    logger.info("booking_updated", booking_id=str(booking.id), fields=sorted(updates))
    return booking


async def list_bookings_for_event(db: AsyncIOMotorDatabase, event_id: Any) -> list[Booking]:
    """All bookings for one event, newest first. Served by the eventId index."""
    oid = try_object_id(event_id)
    if oid is None:
        return []
    cursor = _bookings(db).find({"eventId": oid}).sort("createdAt", DESCENDING)
    return [Booking.from_document(doc) async for doc in cursor]
