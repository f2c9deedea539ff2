"""User-role membership repository port."""

from typing import Protocol
from uuid import UUID

from workshop_rbac.domain.entities import UserRole


class UserRoleRepository(Protocol):
    """Port for user -> role membership."""

    async def list_by_user(self, user_id: UUID) -> list[UserRole]: ...

    async def list_by_role(self, role_id: UUID) -> list[UserRole]: ...

    async def add(self, link: UserRole) -> None: ...

    async def remove(self, user_id: UUID, role_id: UUID) -> bool: ...

    async def delete_by_role(self, role_id: UUID) -> int: ...
