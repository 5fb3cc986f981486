"""
Booking endpoints. Writes go through the validated booking service.
"""

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from eventbook.db.connection import get_database
from eventbook.schemas.booking import BookingCreate, BookingResponse, BookingUpdate
from eventbook.services.booking_service import create_booking, get_booking, update_booking

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking_endpoint(
    booking_data: BookingCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Book an event for an email address.

    Returns 422 for malformed fields and 404 if the event does not exist.
    """
    booking = await create_booking(db, booking_data.model_dump(by_alias=True))
    return BookingResponse.from_booking(booking)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking_endpoint(
    booking_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    booking = await get_booking(db, booking_id)
    return BookingResponse.from_booking(booking)


@router.patch("/{booking_id}", response_model=BookingResponse)
async def update_booking_endpoint(
    booking_id: str,
    changes: BookingUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Only the fields present in the body are changed."""
    booking = await update_booking(
        db, booking_id, changes.model_dump(by_alias=True, exclude_unset=True)
    )
    return BookingResponse.from_booking(booking)
