"""
Booking document: a reservation of one email address for one event.

Stored in the ``bookings`` collection as::

    {_id, eventId, email, createdAt, updatedAt}

Key design decisions:
- eventId must point at an existing event, but that is checked by the
  service layer before writes (see ensure_event_exists), not by the database
- email is normalised (trimmed, lowercased) before it is validated or stored
- Index on eventId serves "all bookings for event X"
"""

import re
from datetime import datetime
from typing import Any, Mapping, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pymongo import ASCENDING

from eventbook.core.exceptions import BookingValidationError
from eventbook.db.registry import IndexSpec, ModelDefinition, registry
from eventbook.models.common import parse_object_id

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

EVENT_ID_REQUIRED = "Event ID is required"
EMAIL_REQUIRED = "Email is required"
EMAIL_INVALID = "Please provide a valid email address"

REQUIRED_MESSAGES = {
    "eventId": EVENT_ID_REQUIRED,
    "email": EMAIL_REQUIRED,
}


class BookingFields(BaseModel):
    """The user-supplied part of a booking."""

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    event_id: ObjectId = Field(alias="eventId")
    email: str

    @field_validator("event_id", mode="before")
    @classmethod
    def _check_event_id(cls, value: Any) -> ObjectId:
        if value is None or value == "":
            raise ValueError(EVENT_ID_REQUIRED)
        try:
            return parse_object_id(value)
        except ValueError:
            raise ValueError(f"Invalid event ID: {value}") from None

    @field_validator("email", mode="before")
    @classmethod
    def _normalise_email(cls, value: Any) -> str:
        if value is None:
            raise ValueError(EMAIL_REQUIRED)
        if not isinstance(value, str):
            raise ValueError(EMAIL_INVALID)
        email = value.strip().lower()
        if not email:
            raise ValueError(EMAIL_REQUIRED)
        if not EMAIL_PATTERN.match(email):
            raise ValueError(EMAIL_INVALID)
        return email


class Booking(BookingFields):
    id: Optional[ObjectId] = Field(default=None, alias="_id")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Booking":
        return cls.model_validate(dict(document))

    def to_document(self) -> dict:
        document = self.model_dump(by_alias=True)
        if document.get("_id") is None:
            document.pop("_id", None)
        return document

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, event={self.event_id}, email={self.email})>"


def _error_message(error: dict) -> str:
    if error["type"] == "missing":
        field = str(error["loc"][0]) if error["loc"] else ""
        return REQUIRED_MESSAGES.get(field, "Field is required")
    cause = error.get("ctx", {}).get("error")
    if isinstance(cause, ValueError):
        return str(cause)
    return error["msg"]


def validate_booking_fields(data: Mapping[str, Any]) -> BookingFields:
    """
    Validate and normalise booking input without touching the database.

    Raises BookingValidationError listing each offending field.
    """
    try:
        return BookingFields.model_validate(dict(data))
    except ValidationError as exc:
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"]) or "__root__",
                "message": _error_message(err),
            }
            for err in exc.errors()
        ]
        raise BookingValidationError(errors) from exc


def _define_booking() -> ModelDefinition:
    return ModelDefinition(
        name="Booking",
        collection="bookings",
        document=Booking,
        indexes=(IndexSpec(keys=(("eventId", ASCENDING),)),),
    )


BOOKING_MODEL = registry.get_or_register("Booking", _define_booking)
