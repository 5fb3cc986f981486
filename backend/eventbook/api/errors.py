"""
Maps domain errors to HTTP responses.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from eventbook.core.exceptions import (
    BookingNotFoundError,
    BookingValidationError,
    EventLookupError,
    EventNotFoundError,
)
from eventbook.core.logging import get_logger

logger = get_logger(__name__)


async def _validation_error(request: Request, exc: BookingValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors},
    )


async def _not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def _unavailable(request: Request, exc: Exception) -> JSONResponse:
    logger.error("database_unavailable", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookingValidationError, _validation_error)
    app.add_exception_handler(EventNotFoundError, _not_found)
    app.add_exception_handler(BookingNotFoundError, _not_found)
    app.add_exception_handler(EventLookupError, _unavailable)
    app.add_exception_handler(PyMongoError, _unavailable)
