"""Permission resolver - role membership plus per-user overrides."""

import logging
from uuid import UUID

from workshop_rbac.domain.entities import PermissionMatrix
from workshop_rbac.domain.exceptions import NotFound
from workshop_rbac.domain.services.resolution import (
    build_matrix,
    index_role_grants,
    override_signal_for,
    resolve,
    role_signal_for,
)

logger = logging.getLogger(__name__)


class PermissionResolver:
    """Answers "is permission P granted to user U?" from the assignment stores.

    Stateless: every call reads the stores through a fresh unit of work, so
    a completed mutation is visible to the next decision.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def is_granted(self, user_id: UUID, permission_name: str) -> bool:
        """Decide one permission. Unknown user or permission raises NotFound."""
        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_name(permission_name)
            if not permission:
                raise NotFound("Permission", permission_name)
            if not await uow.users.get_by_id(user_id):
                raise NotFound("User", str(user_id))

            memberships = await uow.user_roles.list_by_user(user_id)
            role_ids = [m.role_id for m in memberships]
            roles = await uow.roles.get_many(role_ids) if role_ids else []
            links = await uow.role_permissions.list_by_roles(role_ids) if role_ids else []
            override = await uow.user_permissions.get(user_id, permission.id)

        role_grants = index_role_grants(
            roles, (link for link in links if link.permission_id == permission.id)
        )
        overrides = {override.permission_id: override} if override else {}
        return resolve(
            role_signal_for(permission.id, role_grants),
            override_signal_for(permission.id, overrides),
        )

    async def build_effective_matrix(self, user_id: UUID) -> PermissionMatrix:
        """Effective status and provenance for every catalog permission."""
        async with self._uow_factory() as uow:
            if not await uow.users.get_by_id(user_id):
                raise NotFound("User", str(user_id))
            catalog = await uow.permissions.list_all()
            memberships = await uow.user_roles.list_by_user(user_id)
            role_ids = [m.role_id for m in memberships]
            roles = await uow.roles.get_many(role_ids) if role_ids else []
            links = await uow.role_permissions.list_by_roles(role_ids) if role_ids else []
            overrides = await uow.user_permissions.list_by_user(user_id)

        return build_matrix(user_id, catalog, roles, links, overrides)

    async def check(self, user_id: UUID, permission_name: str) -> bool:
        """Authorization gate: like is_granted, but a failed lookup denies."""
        try:
            granted = await self.is_granted(user_id, permission_name)
        except NotFound as e:
            if e.entity == "Permission":
                logger.error("Gate references permission missing from catalog: %s", permission_name)
            else:
                logger.warning("Gate denied unknown user %s for %s", user_id, permission_name)
            return False
        if not granted:
            logger.debug("User %s lacks %s", user_id, permission_name)
        return granted
