"""
SmartAI Backend - Lazy MongoDB Connection
=========================================

What:  One AsyncMongoClient per process, connected on first use and reused
       by every request afterwards.
Why:   The same code runs as a long-lived uvicorn process and as a serverless
       function. In the serverless case there is no reliable startup hook, so
       the connection is opened by the first request that needs it.
How:   DatabaseConnector memoizes the in-flight connect as an asyncio Task.
       Concurrent first requests all await that same Task, so the cluster
       sees exactly one connect per process.

Connect sequence:
    1. Build the client and ping the server (fails fast on bad URI/network)
    2. Log "MongoDB connected successfully"
    3. Create indexes (failure is logged, the connection is still used)
    4. Publish the database handle

Failure handling:
    A failed connect raises DatabaseError (→ 500) for every request waiting
    on it, and the memoized Task is cleared so the next request tries again.

Usage in a route:
    @router.get("/api/quiz")
    async def list_quizzes(db: AsyncDatabase = Depends(get_database)):
        ...
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from smartai import db_indexes
from smartai.config import settings
from smartai.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class DatabaseConnector:
    """
    Owns the MongoDB client and the single in-flight connect.

    Args:
        uri:              MongoDB connection string
        default_db_name:  Database used when the URI names none
        server_selection_timeout_ms: How long the initial ping may wait
        client_factory:   Callable building the client (tests inject mocks)
    """

    def __init__(
        self,
        uri: str,
        default_db_name: str,
        server_selection_timeout_ms: int = 10_000,
        client_factory: Callable[..., Any] = AsyncMongoClient,
    ):
        self._uri = uri
        self._default_db_name = default_db_name
        self._timeout_ms = server_selection_timeout_ms
        self._client_factory = client_factory
        self._client: Optional[Any] = None
        self._db: Optional[AsyncDatabase] = None
        self._connecting: Optional[asyncio.Task] = None

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    async def connect(self) -> AsyncDatabase:
        """
        Return the connected database, connecting first if needed.

        Raises:
            DatabaseError: the connect attempt failed
        """
        if self._db is not None:
            return self._db

        task = self._connecting
        if task is None:
            task = asyncio.ensure_future(self._open())
            self._connecting = task

        try:
            # A cancelled request must not cancel the shared connect
            return await asyncio.shield(task)
        except Exception:
            if self._connecting is task:
                self._connecting = None
            raise

    async def _open(self) -> AsyncDatabase:
        client = None
        try:
            client = self._client_factory(
                self._uri,
                serverSelectionTimeoutMS=self._timeout_ms,
                appname="smartai-backend",
            )
            await client.admin.command("ping")
        except PyMongoError as e:
            logger.error("MongoDB connection error: %s", e)
            if client is not None:
                await client.close()
            raise DatabaseError(
                message="Could not connect to the database. Please try again later.",
                context={"error_type": type(e).__name__},
            )

        db = client.get_default_database(default=self._default_db_name)
        logger.info("MongoDB connected successfully (database=%s)", db.name)

        try:
            await db_indexes.create_indexes(db)
            logger.info("DB indexes created")
        except PyMongoError as e:
            logger.error("Error creating DB indexes: %s", e, exc_info=True)

        self._client = client
        self._db = db
        return db

    async def close(self) -> None:
        """Close the client (if any) and forget all connection state."""
        client = self._client
        self._client = None
        self._db = None
        self._connecting = None
        if client is not None:
            await client.close()
            logger.info("MongoDB connection closed")


connector = DatabaseConnector(
    uri=settings.mongodb_uri,
    default_db_name=settings.mongodb_db_name,
    server_selection_timeout_ms=settings.mongodb_server_selection_timeout_ms,
)


async def get_database() -> AsyncDatabase:
    """FastAPI dependency: the connected database, connecting on first use."""
    return await connector.connect()


async def close_database() -> None:
    """Called during application shutdown (lifespan handler)."""
    await connector.close()
