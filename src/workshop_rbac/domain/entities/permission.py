"""Permission entity - one (resource, action) capability of the catalog."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Permission:
    """Permission - named resource:action, e.g. service_orders:approve."""

    id: UUID
    name: str
    resource: str
    action: str
    created_at: datetime
    description: str | None = None
