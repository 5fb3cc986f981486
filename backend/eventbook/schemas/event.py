"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from eventbook.models.event import Event


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    location: Optional[str] = Field(None, max_length=255)
    date: Optional[datetime] = None


class EventResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: Optional[str]
    location: Optional[str]
    date: Optional[datetime]
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_event(cls, event: Event) -> "EventResponse":
        return cls(
            id=str(event.id),
            title=event.title,
            description=event.description,
            location=event.location,
            date=event.date,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )
