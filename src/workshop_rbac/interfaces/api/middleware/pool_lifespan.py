"""ASGI lifespan hooks for the database pool."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Opens the pool at server startup and drains it at shutdown.

    With ``wait=True`` startup blocks until ``min_size`` connections are up,
    so a wrong DATABASE_URL fails the boot instead of the first request.
    """

    def __init__(
        self, pool: AsyncConnectionPool, *, wait: bool = True, timeout: float = 30.0
    ) -> None:
        self._pool = pool
        self._wait = wait
        self._timeout = timeout

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open(wait=self._wait, timeout=self._timeout)
        stats = self._pool.get_stats()
        logger.info(
            "Database pool %s open (%s connections)", self._pool.name, stats.get("pool_size")
        )

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close(timeout=self._timeout)
        logger.info("Database pool %s closed", self._pool.name)
