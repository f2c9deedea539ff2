"""Role DTOs."""

from dataclasses import dataclass


@dataclass
class RoleCreateInput:
    """Input for creating a role."""

    name: str
    description: str | None = None
    is_system: bool = False


@dataclass
class RoleUpdateInput:
    """Input for updating a role. ``None`` leaves a field unchanged."""

    name: str | None = None
    description: str | None = None
