"""Permission checker port - authorization decisions."""

from typing import Protocol
from uuid import UUID

from workshop_rbac.domain.entities import PermissionMatrix


class PermissionChecker(Protocol):
    """Port for deciding whether a user holds a permission."""

    async def is_granted(self, user_id: UUID, permission_name: str) -> bool: ...

    async def build_effective_matrix(self, user_id: UUID) -> PermissionMatrix: ...

    async def check(self, user_id: UUID, permission_name: str) -> bool: ...
