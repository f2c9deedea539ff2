"""Role entity for RBAC."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Role:
    """Role - sales, technician, manager... System roles cannot be deleted."""

    id: UUID
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime
    is_system: bool = False
