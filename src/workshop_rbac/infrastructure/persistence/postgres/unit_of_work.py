"""PostgreSQL Unit of Work: the seven assignment stores over one connection."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from workshop_rbac.infrastructure.persistence.postgres.audit_log_repository import (
    PostgresAuditLogRepository,
)
from workshop_rbac.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from workshop_rbac.infrastructure.persistence.postgres.role_permission_repository import (
    PostgresRolePermissionRepository,
)
from workshop_rbac.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from workshop_rbac.infrastructure.persistence.postgres.user_permission_repository import (
    PostgresUserPermissionRepository,
)
from workshop_rbac.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)
from workshop_rbac.infrastructure.persistence.postgres.user_role_repository import (
    PostgresUserRoleRepository,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """Repositories bound to a single connection checked out of the pool.

    Row locks taken by one repository (``FOR UPDATE``) are held until the
    owning factory commits or rolls back.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn
        self.permissions = PostgresPermissionRepository(conn)
        self.roles = PostgresRoleRepository(conn)
        self.role_permissions = PostgresRolePermissionRepository(conn)
        self.users = PostgresUserRepository(conn)
        self.user_roles = PostgresUserRoleRepository(conn)
        self.user_permissions = PostgresUserPermissionRepository(conn)
        self.audit_logs = PostgresAuditLogRepository(conn)

    async def commit(self) -> None:
        await self._conn.commit()

    async def rollback(self) -> None:
        await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool):
    """Return an async context manager yielding a fresh unit of work.

    Commits when the block exits cleanly, rolls back on any exception.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        async with pool.connection() as conn:
            uow = PostgresUnitOfWork(conn)
            try:
                yield uow
            except BaseException:
                await uow.rollback()
                logger.debug("Unit of work rolled back")
                raise
            await uow.commit()

    return factory
