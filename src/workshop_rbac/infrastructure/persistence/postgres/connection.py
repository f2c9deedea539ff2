"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool

from workshop_rbac.config import Settings

POOL_NAME = "workshop-rbac"


def create_pool(conninfo: str, *, min_size: int = 2, max_size: int = 10) -> AsyncConnectionPool:
    """Build a closed pool; PoolLifespanMiddleware (or the CLI) opens it.

    Connections are handed out outside autocommit so each unit of work is
    one transaction.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max(min_size, max_size),
        name=POOL_NAME,
        kwargs={"autocommit": False},
        open=False,
    )


def pool_from_settings(settings: Settings) -> AsyncConnectionPool:
    return create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )


async def ping(pool: AsyncConnectionPool) -> bool:
    """Return True when the database answers a trivial query."""
    async with pool.connection() as conn:
        cur = await conn.execute("SELECT 1")
        return (await cur.fetchone()) is not None
