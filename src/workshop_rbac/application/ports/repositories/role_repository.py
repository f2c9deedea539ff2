"""Role repository port."""

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from workshop_rbac.domain.entities import Role


class RoleRepository(Protocol):
    """Port for role persistence."""

    async def get_by_id(self, role_id: UUID, *, for_update: bool = False) -> Role | None: ...

    async def get_by_name(self, name: str) -> Role | None: ...

    async def get_many(self, role_ids: Collection[UUID]) -> list[Role]: ...

    async def list_all(self) -> list[Role]: ...

    async def create(self, role: Role) -> Role: ...

    async def update(self, role: Role) -> None: ...

    async def delete(self, role_id: UUID) -> None: ...
