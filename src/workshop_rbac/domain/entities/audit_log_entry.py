"""Permission audit log entry."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass
class AuditLogEntry:
    """Record of one administrative change to roles, links or overrides."""

    id: UUID
    action: str
    resource_type: str
    created_at: datetime
    resource_id: str | None = None
    user_id: UUID | None = None
    performed_by: UUID | None = None
    changes: dict[str, Any] = field(default_factory=dict)
