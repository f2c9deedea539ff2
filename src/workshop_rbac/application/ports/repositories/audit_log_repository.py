"""Permission audit log repository port."""

from typing import Protocol
from uuid import UUID

from workshop_rbac.domain.entities import AuditLogEntry


class AuditLogRepository(Protocol):
    """Port for the append-only audit log."""

    async def create(self, entry: AuditLogEntry) -> AuditLogEntry: ...

    async def list(
        self,
        *,
        user_id: UUID | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[AuditLogEntry]: ...
