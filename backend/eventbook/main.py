"""
Event Bookings API - Main Application Entry Point

- One MongoDB client per process, opened lazily and shared (eventbook.db.connection)
- Bookings validated and checked against their event before every write
- Structured logging with request correlation
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorDatabase

import eventbook.models  # noqa: F401  registers Booking and Event
from eventbook.api.errors import register_exception_handlers
from eventbook.api.middleware import RequestLoggingMiddleware
from eventbook.api.router import api_router
from eventbook.core.config import get_settings
from eventbook.core.logging import get_logger, setup_logging
from eventbook.db.connection import close_connection, get_database
from eventbook.db.registry import ensure_indexes

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    db = await get_database()
    await ensure_indexes(db)

    yield

    await close_connection()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Event bookings backed by MongoDB",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check(db: AsyncIOMotorDatabase = Depends(get_database)):
    """Health check endpoint for Docker and load balancers."""
    await db.command("ping")
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "database": "connected",
    }
