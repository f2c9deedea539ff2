"""User entity - directory entry owned by the authentication layer."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class User:
    """User known to the back office."""

    id: UUID
    full_name: str | None = None
    email: str | None = None
