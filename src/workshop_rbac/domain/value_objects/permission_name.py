"""Permission name - ``resource:action``."""

import re
from dataclasses import dataclass

_PART = re.compile(r"^[a-z][a-z0-9_]*$")


@dataclass(frozen=True)
class PermissionName:
    """Parsed permission name."""

    resource: str
    action: str

    def __post_init__(self) -> None:
        if not _PART.match(self.resource):
            raise ValueError(f"Invalid permission resource: {self.resource!r}")
        if not _PART.match(self.action):
            raise ValueError(f"Invalid permission action: {self.action!r}")

    @classmethod
    def parse(cls, name: str) -> "PermissionName":
        resource, sep, action = name.strip().partition(":")
        if not sep:
            raise ValueError(f"Permission name must be 'resource:action': {name!r}")
        return cls(resource=resource, action=action)

    def __str__(self) -> str:
        return f"{self.resource}:{self.action}"
