"""PostgreSQL permission catalog repository implementation."""

from collections.abc import Collection
from uuid import UUID

from psycopg import AsyncConnection

from workshop_rbac.domain.entities import Permission
from workshop_rbac.infrastructure.persistence.postgres.errors import integrity_as_conflict

_COLUMNS = "id, name, resource, action, description, created_at"


def _to_permission(r: tuple) -> Permission:
    return Permission(
        id=r[0],
        name=r[1],
        resource=r[2],
        action=r[3],
        description=r[4],
        created_at=r[5],
    )


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        """Get permission by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE id = %s",
            (permission_id,),
        )
        r = await cur.fetchone()
        return _to_permission(r) if r else None

    async def get_by_name(self, name: str) -> Permission | None:
        """Get permission by unique name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        return _to_permission(r) if r else None

    async def get_many(self, permission_ids: Collection[UUID]) -> list[Permission]:
        """Get the permissions that exist among permission_ids."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE id = ANY(%s)",
            (list(permission_ids),),
        )
        return [_to_permission(r) for r in await cur.fetchall()]

    async def list_all(self) -> list[Permission]:
        """List the whole catalog ordered by resource, action."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission ORDER BY resource, action"
        )
        return [_to_permission(r) for r in await cur.fetchall()]

    async def list_by_resource(self, resource: str) -> list[Permission]:
        """List permissions of one resource ordered by action."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE resource = %s ORDER BY action",
            (resource,),
        )
        return [_to_permission(r) for r in await cur.fetchall()]

    async def create(self, permission: Permission) -> Permission:
        """Create permission."""
        with integrity_as_conflict(f"Permission '{permission.name}'"):
            await self._conn.execute(
                f"INSERT INTO permission ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s)",
                (
                    permission.id,
                    permission.name,
                    permission.resource,
                    permission.action,
                    permission.description,
                    permission.created_at,
                ),
            )
        return permission

    async def delete(self, permission_id: UUID) -> None:
        """Delete permission."""
        with integrity_as_conflict("Permission assignment"):
            await self._conn.execute(
                "DELETE FROM permission WHERE id = %s",
                (permission_id,),
            )

    async def is_referenced(self, permission_id: UUID) -> bool:
        """True when a role link or user override points at the permission."""
        cur = await self._conn.execute(
            "SELECT EXISTS (SELECT 1 FROM role_permission WHERE permission_id = %s) "
            "OR EXISTS (SELECT 1 FROM user_permission WHERE permission_id = %s)",
            (permission_id, permission_id),
        )
        r = await cur.fetchone()
        return bool(r[0])
