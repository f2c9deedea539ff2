"""User-role membership."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserRole:
    """User holds role. Roles are additive."""

    user_id: UUID
    role_id: UUID
    created_at: datetime
    assigned_by: UUID | None = None
