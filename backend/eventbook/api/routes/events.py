"""
Event endpoints.
"""

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from eventbook.db.connection import get_database
from eventbook.schemas.booking import BookingResponse
from eventbook.schemas.event import EventCreate, EventResponse
from eventbook.services.booking_service import list_bookings_for_event
from eventbook.services.event_service import create_event, delete_event, get_event

router = APIRouter(prefix="/events", tags=["Events"])


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    event = await create_event(db, event_data)
    return EventResponse.from_event(event)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event_endpoint(
    event_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    event = await get_event(db, event_id)
    return EventResponse.from_event(event)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event_endpoint(
    event_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Delete an event. Its bookings are kept."""
    await delete_event(db, event_id)


@router.get("/{event_id}/bookings", response_model=list[BookingResponse])
async def list_event_bookings_endpoint(
    event_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """All bookings for an event, newest first."""
    await get_event(db, event_id)
    bookings = await list_bookings_for_event(db, event_id)
    return [BookingResponse.from_booking(b) for b in bookings]
