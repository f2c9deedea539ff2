"""Role-permission link."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class RolePermission:
    """Role grants permission. Identity is the (role_id, permission_id) pair."""

    role_id: UUID
    permission_id: UUID
    created_at: datetime
