"""Clear user permission override use case."""

import logging
from uuid import UUID

from workshop_rbac.application.audit import AuditAction, record_change
from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class ClearUserPermissionOverrideUseCase:
    """Remove an override; the role-derived signal decides again."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, user_id: UUID, permission_id: UUID) -> None:
        """Clear override. Actor must have permissions:revoke."""
        await ensure_granted(self._permission_checker, actor_id, "permissions:revoke")

        async with self._uow_factory() as uow:
            existing = await uow.user_permissions.get(user_id, permission_id)
            if not existing:
                raise NotFound("UserPermission", f"{user_id}/{permission_id}")
            await uow.user_permissions.delete(user_id, permission_id)
            await record_change(
                uow,
                AuditAction.CLEAR_USER_PERMISSION,
                "user_permission",
                resource_id=user_id,
                user_id=user_id,
                performed_by=actor_id,
                changes={"permission_id": str(permission_id), "was_granted": existing.granted},
            )

        logger.info("User %s override on %s cleared by %s", user_id, permission_id, actor_id)
