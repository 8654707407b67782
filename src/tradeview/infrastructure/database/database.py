"""asyncpg connection pool lifecycle."""

import asyncpg

from tradeview.config.state import DatabaseConfig
from tradeview.exceptions import QueryExecutionError
from tradeview.infrastructure.observability import get_infrastructure_logger

logger = get_infrastructure_logger("database-pool")


class Database:
    """Owns the asyncpg pool shared by every request.

    The pool is created by ``connect()`` on application startup and closed by
    ``disconnect()`` on shutdown; ``pool`` is ``None`` in between.
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self.pool is not None:
            return

        try:
            self.pool = await asyncpg.create_pool(
                dsn=self.config.url,
                min_size=self.config.min_pool_size,
                max_size=self.config.max_pool_size,
                command_timeout=self.config.command_timeout,
            )
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error("pool_connect_failed", error=str(e))
            raise QueryExecutionError(f"Could not connect to database: {e}") from e

        logger.info(
            "pool_connected",
            min_size=self.config.min_pool_size,
            max_size=self.config.max_pool_size,
        )

    async def disconnect(self) -> None:
        if self.pool is None:
            return

        await self.pool.close()
        self.pool = None
        logger.info("pool_closed")
