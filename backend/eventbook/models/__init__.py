from eventbook.models.booking import Booking, BOOKING_MODEL
from eventbook.models.event import Event, EVENT_MODEL

__all__ = ["Booking", "BOOKING_MODEL", "Event", "EVENT_MODEL"]
