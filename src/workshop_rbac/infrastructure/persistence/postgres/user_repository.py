"""PostgreSQL user directory implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from workshop_rbac.domain.entities import User


class PostgresUserRepository:
    """User repository implementation (reads user_profile)."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: UUID, *, for_update: bool = False) -> User | None:
        """Get user by id; for_update serializes concurrent role replacements."""
        q = "SELECT id, full_name, email FROM user_profile WHERE id = %s"
        if for_update:
            q += " FOR UPDATE"
        cur = await self._conn.execute(q, (user_id,))
        r = await cur.fetchone()
        if not r:
            return None
        return User(id=r[0], full_name=r[1], email=r[2])
