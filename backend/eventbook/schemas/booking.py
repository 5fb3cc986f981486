"""
Pydantic schemas for booking-related request/response validation.

Request bodies are deliberately loose: field rules live in
eventbook.models.booking so API and service callers get the same errors.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from eventbook.models.booking import Booking


class BookingCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_id: Optional[str] = Field(None, alias="eventId")
    email: Optional[str] = None


class BookingUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_id: Optional[str] = Field(None, alias="eventId")
    email: Optional[str] = None


class BookingResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    event_id: str = Field(alias="eventId")
    email: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=str(booking.id),
            event_id=str(booking.event_id),
            email=booking.email,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )
