"""Permission catalog repository port."""

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from workshop_rbac.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permission catalog persistence."""

    async def get_by_id(self, permission_id: UUID) -> Permission | None: ...

    async def get_by_name(self, name: str) -> Permission | None: ...

    async def get_many(self, permission_ids: Collection[UUID]) -> list[Permission]: ...

    async def list_all(self) -> list[Permission]: ...

    async def list_by_resource(self, resource: str) -> list[Permission]: ...

    async def create(self, permission: Permission) -> Permission: ...

    async def delete(self, permission_id: UUID) -> None: ...

    async def is_referenced(self, permission_id: UUID) -> bool: ...
