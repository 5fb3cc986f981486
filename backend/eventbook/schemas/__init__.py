from eventbook.schemas.event import EventCreate, EventResponse
from eventbook.schemas.booking import BookingCreate, BookingUpdate, BookingResponse

__all__ = [
    "EventCreate", "EventResponse",
    "BookingCreate", "BookingUpdate", "BookingResponse",
]
