"""Permission catalog DTOs."""

from dataclasses import dataclass


@dataclass
class PermissionCreateInput:
    """Input for adding a permission to the catalog.

    ``name`` defaults to ``resource:action``; when given it must match.
    """

    resource: str
    action: str
    description: str | None = None
    name: str | None = None
