"""Role-permission link repository port."""

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from workshop_rbac.domain.entities import RolePermission


class RolePermissionRepository(Protocol):
    """Port for role -> permission links."""

    async def list_by_role(self, role_id: UUID) -> list[RolePermission]: ...

    async def list_by_roles(self, role_ids: Collection[UUID]) -> list[RolePermission]: ...

    async def add(self, link: RolePermission) -> None: ...

    async def remove(self, role_id: UUID, permission_id: UUID) -> bool: ...

    async def delete_by_role(self, role_id: UUID) -> int: ...
