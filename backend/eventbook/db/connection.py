"""
Process-wide MongoDB connection cache.

CONNECTION LIFECYCLE
====================

One client per process, created lazily on first use:

  1. A cached client is returned immediately, without I/O.
  2. Otherwise the first caller starts a single connection attempt and
     stores it as the in-flight task. Callers arriving while it runs
     await that same task instead of starting their own.
  3. On success the client is cached for the rest of the process.
  4. On failure the in-flight task is cleared, whether or not anyone is
     still awaiting it, and the error reaches every remaining
     waiter. Nothing is retried here; the next call simply starts over.

All of this runs on one event loop, so the in-flight task field is the
only mutual exclusion needed.

The client is built to fail fast: operations issued while no server is
reachable error out after MONGODB_SERVER_SELECTION_TIMEOUT_MS instead of
queueing indefinitely.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from eventbook.core.config import get_settings
from eventbook.core.exceptions import ConnectionClosedError
from eventbook.core.logging import get_logger

logger = get_logger(__name__)

# Read at import so a process without MONGODB_URI fails at startup
settings = get_settings()

Connector = Callable[[str], Awaitable[AsyncIOMotorClient]]


async def open_client(uri: str) -> AsyncIOMotorClient:
    """Create a client and confirm the server answers a ping."""
    client = AsyncIOMotorClient(
        uri,
        serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        tz_aware=True,
    )
    try:
        await client.admin.command("ping")
    except Exception:
        client.close()
        raise
    return client


class ConnectionCache:
    """Holds at most one client and at most one in-flight connection attempt."""

    def __init__(self, uri: str, connector: Optional[Connector] = None):
        self.uri = uri
        self.connection: Optional[AsyncIOMotorClient] = None
        self.pending: Optional[asyncio.Task] = None
        self._connector = connector or open_client

    async def get(self) -> AsyncIOMotorClient:
        if self.connection is not None:
            return self.connection

        if self.pending is None:
            logger.info("mongodb_connecting")
            self.pending = asyncio.ensure_future(self._connector(self.uri))
            # Registered before any waiter, so it runs before they resume
            self.pending.add_done_callback(self._settle)

        # shield: a cancelled waiter must not cancel the shared attempt
        connection = await asyncio.shield(self.pending)
        if connection is not self.connection:
            raise ConnectionClosedError("Connection was closed while it was being established")
        return connection

    def _settle(self, task: asyncio.Task) -> None:
        """Record the outcome of an attempt, even if nobody is awaiting it."""
        current = self.pending is task
        if current:
            self.pending = None
        if task.cancelled():
            return

        error = task.exception()
        if error is not None:
            logger.error("mongodb_connection_failed", error=str(error))
            return

        client = task.result()
        if not current:
            # close() ran while this attempt was in flight
            client.close()
            logger.info("mongodb_closed", reason="closed_while_connecting")
            return
        self.connection = client
        logger.info("mongodb_connected")

    def close(self) -> None:
        if self.connection is not None:
            self.connection.close()
            self.connection = None
            logger.info("mongodb_closed")
        self.pending = None


_cache = ConnectionCache(settings.MONGODB_URI)


async def get_connection() -> AsyncIOMotorClient:
    """Return the shared client, connecting on first use."""
    return await _cache.get()


async def close_connection() -> None:
    """Close the shared client on shutdown."""
    _cache.close()


async def get_database() -> AsyncIOMotorDatabase:
    """FastAPI dependency yielding the configured database."""
    client = await get_connection()
    return client[settings.MONGODB_DB_NAME]
