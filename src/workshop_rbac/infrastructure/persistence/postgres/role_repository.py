"""PostgreSQL role repository implementation."""

from collections.abc import Collection
from uuid import UUID

from psycopg import AsyncConnection

from workshop_rbac.domain.entities import Role
from workshop_rbac.infrastructure.persistence.postgres.errors import integrity_as_conflict

_COLUMNS = "id, name, description, is_system, created_at, updated_at"


def _to_role(r: tuple) -> Role:
    return Role(
        id=r[0],
        name=r[1],
        description=r[2],
        is_system=r[3],
        created_at=r[4],
        updated_at=r[5],
    )


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: UUID, *, for_update: bool = False) -> Role | None:
        """Get role by id; for_update locks the row until the transaction ends."""
        q = f"SELECT {_COLUMNS} FROM role WHERE id = %s"
        if for_update:
            q += " FOR UPDATE"
        cur = await self._conn.execute(q, (role_id,))
        r = await cur.fetchone()
        return _to_role(r) if r else None

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        return _to_role(r) if r else None

    async def get_many(self, role_ids: Collection[UUID]) -> list[Role]:
        """Get the roles that exist among role_ids."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE id = ANY(%s) ORDER BY name",
            (list(role_ids),),
        )
        return [_to_role(r) for r in await cur.fetchall()]

    async def list_all(self) -> list[Role]:
        """List all roles."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM role ORDER BY name")
        return [_to_role(r) for r in await cur.fetchall()]

    async def create(self, role: Role) -> Role:
        """Create role."""
        with integrity_as_conflict(f"Role '{role.name}'"):
            await self._conn.execute(
                f"INSERT INTO role ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s)",
                (
                    role.id,
                    role.name,
                    role.description,
                    role.is_system,
                    role.created_at,
                    role.updated_at,
                ),
            )
        return role

    async def update(self, role: Role) -> None:
        """Update role name and description."""
        with integrity_as_conflict(f"Role '{role.name}'"):
            await self._conn.execute(
                "UPDATE role SET name = %s, description = %s, updated_at = %s WHERE id = %s",
                (role.name, role.description, role.updated_at, role.id),
            )

    async def delete(self, role_id: UUID) -> None:
        """Delete role row. Links must be removed first."""
        with integrity_as_conflict("Role assignment"):
            await self._conn.execute("DELETE FROM role WHERE id = %s", (role_id,))
