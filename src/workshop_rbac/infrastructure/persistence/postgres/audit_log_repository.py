"""PostgreSQL permission audit log repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from workshop_rbac.domain.entities import AuditLogEntry

_COLUMNS = "id, action, resource_type, resource_id, user_id, performed_by, changes, created_at"


def _to_entry(r: tuple) -> AuditLogEntry:
    return AuditLogEntry(
        id=r[0],
        action=r[1],
        resource_type=r[2],
        resource_id=r[3],
        user_id=r[4],
        performed_by=r[5],
        changes=r[6] or {},
        created_at=r[7],
    )


class PostgresAuditLogRepository:
    """Audit log repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Append entry."""
        await self._conn.execute(
            f"INSERT INTO permission_audit_log ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.action,
                entry.resource_type,
                entry.resource_id,
                entry.user_id,
                entry.performed_by,
                Jsonb(entry.changes),
                entry.created_at,
            ),
        )
        return entry

    async def list(
        self,
        *,
        user_id: UUID | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[AuditLogEntry]:
        """List entries newest first, optionally for one affected user."""
        where = ""
        params: list[object] = []
        if user_id is not None:
            where = " WHERE user_id = %s"
            params.append(user_id)
        params.extend([limit, offset])
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_audit_log{where} "
            "ORDER BY created_at DESC LIMIT %s OFFSET %s",
            tuple(params),
        )
        return [_to_entry(r) for r in await cur.fetchall()]
