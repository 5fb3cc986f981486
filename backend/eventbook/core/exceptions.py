"""
Domain errors raised by the service and data layers.

Connection failures are not wrapped: whatever the driver raises while
connecting reaches the caller of ``get_connection`` unchanged.
"""


class EventbookError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(EventbookError):
    """Required configuration is missing. Fatal at startup."""


class BookingValidationError(EventbookError):
    """One or more booking fields are missing or malformed."""

    def __init__(self, errors: list[dict]):
        self.errors = errors
        summary = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        super().__init__(f"Booking validation failed: {summary}")


class EventNotFoundError(EventbookError):
    """The referenced event does not exist."""

    def __init__(self, event_id, message: str | None = None):
        self.event_id = event_id
        super().__init__(message or f"Event with ID {event_id} does not exist.")


class EventLookupError(EventbookError):
    """The event existence check itself failed."""

    def __init__(self, event_id, cause: Exception):
        self.event_id = event_id
        super().__init__(f"Failed to validate event reference: {cause}")


class BookingNotFoundError(EventbookError):
    def __init__(self, booking_id):
        self.booking_id = booking_id
        super().__init__(f"Booking with ID {booking_id} does not exist.")


class DuplicateModelError(EventbookError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Model {name!r} is already registered")


class ConnectionClosedError(EventbookError):
    """The cache was closed while a connection attempt was in flight."""
