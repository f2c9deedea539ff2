"""PostgreSQL user permission override repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from workshop_rbac.domain.entities import UserPermission
from workshop_rbac.infrastructure.persistence.postgres.errors import integrity_as_conflict

_COLUMNS = "user_id, permission_id, granted, assigned_at, assigned_by"


def _to_override(r: tuple) -> UserPermission:
    return UserPermission(
        user_id=r[0],
        permission_id=r[1],
        granted=r[2],
        assigned_at=r[3],
        assigned_by=r[4],
    )


class PostgresUserPermissionRepository:
    """User permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, user_id: UUID, permission_id: UUID) -> UserPermission | None:
        """Get override for (user, permission)."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_permission WHERE user_id = %s AND permission_id = %s",
            (user_id, permission_id),
        )
        r = await cur.fetchone()
        return _to_override(r) if r else None

    async def list_by_user(self, user_id: UUID) -> list[UserPermission]:
        """List overrides of user, newest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_permission WHERE user_id = %s ORDER BY assigned_at DESC",
            (user_id,),
        )
        return [_to_override(r) for r in await cur.fetchall()]

    async def upsert(self, override: UserPermission) -> UserPermission:
        """Insert or replace the override for (user, permission)."""
        with integrity_as_conflict("User permission"):
            await self._conn.execute(
                f"INSERT INTO user_permission ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s) "
                "ON CONFLICT (user_id, permission_id) DO UPDATE SET "
                "granted = EXCLUDED.granted, assigned_at = EXCLUDED.assigned_at, "
                "assigned_by = EXCLUDED.assigned_by",
                (
                    override.user_id,
                    override.permission_id,
                    override.granted,
                    override.assigned_at,
                    override.assigned_by,
                ),
            )
        return override

    async def delete(self, user_id: UUID, permission_id: UUID) -> bool:
        """Delete override; False when it did not exist."""
        cur = await self._conn.execute(
            "DELETE FROM user_permission WHERE user_id = %s AND permission_id = %s",
            (user_id, permission_id),
        )
        return cur.rowcount > 0
