"""User permission override (explicit grant or deny)."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class UserPermission:
    """Override for one (user, permission) pair - wins over role membership."""

    user_id: UUID
    permission_id: UUID
    granted: bool
    assigned_at: datetime
    assigned_by: UUID | None = None
