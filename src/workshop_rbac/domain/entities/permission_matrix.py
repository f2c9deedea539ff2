"""Effective permission matrix for one user."""

from dataclasses import dataclass, field
from uuid import UUID

from workshop_rbac.domain.entities.permission import Permission
from workshop_rbac.domain.value_objects import OverrideSignal


@dataclass(frozen=True)
class MatrixEntry:
    """Effective status of one catalog permission, with provenance."""

    permission: Permission
    effective_status: bool
    granted_by_roles: tuple[str, ...] = ()
    override: OverrideSignal = OverrideSignal.ABSENT

    @property
    def role_granted(self) -> bool:
        return bool(self.granted_by_roles)


@dataclass
class PermissionMatrix:
    """One entry per catalog permission, ordered by (resource, action)."""

    user_id: UUID
    entries: list[MatrixEntry] = field(default_factory=list)

    def get(self, permission_name: str) -> MatrixEntry | None:
        for entry in self.entries:
            if entry.permission.name == permission_name:
                return entry
        return None

    def granted_names(self) -> list[str]:
        """Names of all effectively granted permissions."""
        return [e.permission.name for e in self.entries if e.effective_status]

    def by_resource(self) -> dict[str, dict[str, MatrixEntry]]:
        """Group as resource -> action -> entry (admin grid layout)."""
        grid: dict[str, dict[str, MatrixEntry]] = {}
        for entry in self.entries:
            grid.setdefault(entry.permission.resource, {})[entry.permission.action] = entry
        return grid
