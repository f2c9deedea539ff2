"""Update role use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from workshop_rbac.application.audit import AuditAction, record_change
from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.dto.role_dto import RoleUpdateInput
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.application.use_cases.role.create_role import normalize_role_name
from workshop_rbac.domain.entities import Role
from workshop_rbac.domain.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)


class UpdateRoleUseCase:
    """Rename a role or change its description."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, role_id: UUID, data: RoleUpdateInput) -> Role:
        """Update role. System roles keep their name; description stays editable."""
        await ensure_granted(self._permission_checker, actor_id, "roles:update")

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id, for_update=True)
            if not role:
                raise NotFound("Role", str(role_id))

            changes: dict[str, object] = {}
            if data.name is not None:
                name = normalize_role_name(data.name)
                if name != role.name:
                    if role.is_system:
                        raise ValidationError("Cannot rename system roles")
                    if await uow.roles.get_by_name(name):
                        raise ValidationError(f"Role with name '{name}' already exists")
                    changes["name"] = {"from": role.name, "to": name}
                    role.name = name
            if data.description is not None and data.description != role.description:
                changes["description"] = {"from": role.description, "to": data.description}
                role.description = data.description

            if not changes:
                return role

            role.updated_at = datetime.now(UTC)
            await uow.roles.update(role)
            await record_change(
                uow,
                AuditAction.UPDATE_ROLE,
                "role",
                resource_id=role.id,
                performed_by=actor_id,
                changes=changes,
            )

        logger.info("Role %s updated by %s: %s", role.id, actor_id, sorted(changes))
        return role
