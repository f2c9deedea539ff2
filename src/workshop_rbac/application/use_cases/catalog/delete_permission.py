"""Delete permission use case."""

import logging
from uuid import UUID

from workshop_rbac.application.audit import AuditAction, record_change
from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.domain.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)


class DeletePermissionUseCase:
    """Remove an unused permission from the catalog.

    A permission still linked to a role or targeted by an override is
    rejected; unlink it first.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, permission_id: UUID) -> None:
        await ensure_granted(self._permission_checker, actor_id, "permissions:delete")

        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_id(permission_id)
            if not permission:
                raise NotFound("Permission", str(permission_id))
            if await uow.permissions.is_referenced(permission_id):
                raise ValidationError(
                    f"Permission '{permission.name}' is assigned to roles or users"
                )
            await uow.permissions.delete(permission_id)
            await record_change(
                uow,
                AuditAction.DELETE_PERMISSION,
                "permission",
                resource_id=permission_id,
                performed_by=actor_id,
                changes={"name": permission.name},
            )

        logger.info("Permission %s deleted by %s", permission.name, actor_id)
