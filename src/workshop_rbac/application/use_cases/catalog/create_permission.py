"""Create permission use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from workshop_rbac.application.audit import AuditAction, record_change
from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.dto.permission_dto import PermissionCreateInput
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.domain.entities import Permission
from workshop_rbac.domain.exceptions import ValidationError
from workshop_rbac.domain.value_objects import PermissionName

logger = logging.getLogger(__name__)


class CreatePermissionUseCase:
    """Add a permission to the catalog."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, data: PermissionCreateInput) -> Permission:
        await ensure_granted(self._permission_checker, actor_id, "permissions:create")
        try:
            name = PermissionName(resource=data.resource.strip(), action=data.action.strip())
        except ValueError as e:
            raise ValidationError(str(e)) from e
        if data.name is not None and data.name.strip() != str(name):
            raise ValidationError(f"Permission name must be '{name}'")

        async with self._uow_factory() as uow:
            if await uow.permissions.get_by_name(str(name)):
                raise ValidationError(f"Permission '{name}' already exists")
            permission = Permission(
                id=uuid4(),
                name=str(name),
                resource=name.resource,
                action=name.action,
                description=data.description,
                created_at=datetime.now(UTC),
            )
            await uow.permissions.create(permission)
            await record_change(
                uow,
                AuditAction.CREATE_PERMISSION,
                "permission",
                resource_id=permission.id,
                performed_by=actor_id,
                changes={"name": permission.name},
            )

        logger.info("Permission %s created by %s", permission.name, actor_id)
        return permission
