"""User permission override repository port."""

from typing import Protocol
from uuid import UUID

from workshop_rbac.domain.entities import UserPermission


class UserPermissionRepository(Protocol):
    """Port for per-user overrides. At most one row per (user, permission)."""

    async def get(self, user_id: UUID, permission_id: UUID) -> UserPermission | None: ...

    async def list_by_user(self, user_id: UUID) -> list[UserPermission]: ...

    async def upsert(self, override: UserPermission) -> UserPermission: ...

    async def delete(self, user_id: UUID, permission_id: UUID) -> bool: ...
