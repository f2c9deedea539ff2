"""PostgreSQL role-permission link repository implementation."""

from collections.abc import Collection
from uuid import UUID

from psycopg import AsyncConnection

from workshop_rbac.domain.entities import RolePermission
from workshop_rbac.infrastructure.persistence.postgres.errors import integrity_as_conflict


class PostgresRolePermissionRepository:
    """Role-permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_by_role(self, role_id: UUID) -> list[RolePermission]:
        """List links of one role."""
        cur = await self._conn.execute(
            "SELECT role_id, permission_id, created_at FROM role_permission WHERE role_id = %s",
            (role_id,),
        )
        rows = await cur.fetchall()
        return [RolePermission(role_id=r[0], permission_id=r[1], created_at=r[2]) for r in rows]

    async def list_by_roles(self, role_ids: Collection[UUID]) -> list[RolePermission]:
        """List links of several roles in one query."""
        cur = await self._conn.execute(
            "SELECT role_id, permission_id, created_at FROM role_permission WHERE role_id = ANY(%s)",
            (list(role_ids),),
        )
        rows = await cur.fetchall()
        return [RolePermission(role_id=r[0], permission_id=r[1], created_at=r[2]) for r in rows]

    async def add(self, link: RolePermission) -> None:
        """Insert link."""
        with integrity_as_conflict("Role permission"):
            await self._conn.execute(
                "INSERT INTO role_permission (role_id, permission_id, created_at) VALUES (%s, %s, %s)",
                (link.role_id, link.permission_id, link.created_at),
            )

    async def remove(self, role_id: UUID, permission_id: UUID) -> bool:
        """Delete link; False when it did not exist."""
        cur = await self._conn.execute(
            "DELETE FROM role_permission WHERE role_id = %s AND permission_id = %s",
            (role_id, permission_id),
        )
        return cur.rowcount > 0

    async def delete_by_role(self, role_id: UUID) -> int:
        """Delete all links of a role; returns the number removed."""
        cur = await self._conn.execute(
            "DELETE FROM role_permission WHERE role_id = %s",
            (role_id,),
        )
        return cur.rowcount
