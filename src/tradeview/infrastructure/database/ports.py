"""
Database adapter interfaces and implementations.
Provides abstraction over database operations for dependency injection.
"""

import asyncio
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Protocol

import asyncpg

from tradeview.exceptions import QueryExecutionError
from tradeview.infrastructure.observability import get_database_logger

from .database import Database

logger = get_database_logger()

# asyncio.TimeoutError is only an alias of the builtin from Python 3.11
DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class IDatabaseAdapter(Protocol):
    """
    Protocol defining the query capability handed to the query layer.
    Enables dependency injection and testing with different implementations.
    """

    async def connect(self) -> None:
        """Establish database connection."""
        ...

    async def disconnect(self) -> None:
        """Close database connection."""
        ...

    async def fetch_one(self, query: str, *args: Any) -> dict[str, Any] | None:
        """Fetch single row as dictionary."""
        ...

    async def fetch_all(self, query: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a parameterized statement and return every row.

        Args:
            query: SQL text with positional placeholders ($1, $2, ...)
            *args: Placeholder values, bound by the driver

        Returns:
            Rows as dictionaries, in the order the database produced them
        """
        ...


class DatabaseAdapter:
    """
    Concrete implementation wrapping ``Database``.
    Adapts the asyncpg pool to the IDatabaseAdapter protocol and turns driver
    failures into ``QueryExecutionError``.
    """

    def __init__(self, database: Database):
        """
        Initialize adapter.

        Args:
            database: Pool owner the statements run against
        """
        self._db = database

    async def connect(self) -> None:
        """Establish database connection."""
        await self._db.connect()

    async def disconnect(self) -> None:
        """Close database connection."""
        await self._db.disconnect()

    @asynccontextmanager
    async def _connection(self, query: str) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a pooled connection; driver failures become QueryExecutionError."""
        if self._db.pool is None:
            raise QueryExecutionError("Database not connected", statement=query)

        try:
            async with self._db.pool.acquire() as conn:
                yield conn
        except DRIVER_ERRORS as e:
            logger.error("query_failed", error=str(e), error_type=type(e).__name__)
            raise QueryExecutionError(str(e), statement=query) from e

    async def fetch_one(self, query: str, *args: Any) -> dict[str, Any] | None:
        """Fetch single row as dictionary."""
        async with self._connection(query) as conn:
            row = await conn.fetchrow(query, *args)
        return dict(row) if row else None

    async def fetch_all(self, query: str, *args: Any) -> list[dict[str, Any]]:
        """Fetch all rows as list of dictionaries."""
        started = time.perf_counter()
        async with self._connection(query) as conn:
            records = await conn.fetch(query, *args)

        logger.debug(
            "query_executed",
            rows=len(records),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return [dict(record) for record in records]
