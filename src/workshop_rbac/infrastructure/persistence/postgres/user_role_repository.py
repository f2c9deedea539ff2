"""PostgreSQL user-role membership repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from workshop_rbac.domain.entities import UserRole
from workshop_rbac.infrastructure.persistence.postgres.errors import integrity_as_conflict

_COLUMNS = "user_id, role_id, created_at, assigned_by"


def _to_user_role(r: tuple) -> UserRole:
    return UserRole(user_id=r[0], role_id=r[1], created_at=r[2], assigned_by=r[3])


class PostgresUserRoleRepository:
    """User-role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_by_user(self, user_id: UUID) -> list[UserRole]:
        """List roles held by user."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_role WHERE user_id = %s",
            (user_id,),
        )
        return [_to_user_role(r) for r in await cur.fetchall()]

    async def list_by_role(self, role_id: UUID) -> list[UserRole]:
        """List members of role."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_role WHERE role_id = %s",
            (role_id,),
        )
        return [_to_user_role(r) for r in await cur.fetchall()]

    async def add(self, link: UserRole) -> None:
        """Insert membership."""
        with integrity_as_conflict("User role"):
            await self._conn.execute(
                f"INSERT INTO user_role ({_COLUMNS}) VALUES (%s, %s, %s, %s)",
                (link.user_id, link.role_id, link.created_at, link.assigned_by),
            )

    async def remove(self, user_id: UUID, role_id: UUID) -> bool:
        """Delete membership; False when it did not exist."""
        cur = await self._conn.execute(
            "DELETE FROM user_role WHERE user_id = %s AND role_id = %s",
            (user_id, role_id),
        )
        return cur.rowcount > 0

    async def delete_by_role(self, role_id: UUID) -> int:
        """Delete all memberships of a role; returns the number removed."""
        cur = await self._conn.execute(
            "DELETE FROM user_role WHERE role_id = %s",
            (role_id,),
        )
        return cur.rowcount
