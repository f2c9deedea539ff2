"""Remove a single permission from a role."""

import logging
from uuid import UUID

from workshop_rbac.application.audit import AuditAction, record_change
from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class RemoveRolePermissionUseCase:
    """Unlink one permission from a role."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, role_id: UUID, permission_id: UUID) -> None:
        await ensure_granted(self._permission_checker, actor_id, "permissions:revoke")

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id, for_update=True)
            if not role:
                raise NotFound("Role", str(role_id))
            if not await uow.role_permissions.remove(role_id, permission_id):
                raise NotFound("RolePermission", f"{role_id}/{permission_id}")
            await record_change(
                uow,
                AuditAction.REMOVE_ROLE_PERMISSION,
                "role_permission",
                resource_id=role_id,
                performed_by=actor_id,
                changes={"removed": [str(permission_id)]},
            )

        logger.info("Permission %s removed from role %s by %s", permission_id, role_id, actor_id)
