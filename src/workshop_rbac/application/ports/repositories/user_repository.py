"""User directory port."""

from typing import Protocol
from uuid import UUID

from workshop_rbac.domain.entities import User


class UserRepository(Protocol):
    """Port for looking up users (read-only)."""

    async def get_by_id(self, user_id: UUID, *, for_update: bool = False) -> User | None: ...
