"""Create role use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from workshop_rbac.application.audit import AuditAction, record_change
from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.dto.role_dto import RoleCreateInput
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.domain.entities import Role
from workshop_rbac.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

ROLE_NAME_MAX_LENGTH = 100


def normalize_role_name(name: str | None) -> str:
    """Strip and validate a role name."""
    if name is not None and not isinstance(name, str):
        raise ValidationError("Role name must be a string")
    name = (name or "").strip()
    if not name:
        raise ValidationError("Role name must not be empty")
    if len(name) > ROLE_NAME_MAX_LENGTH:
        raise ValidationError(f"Role name must be at most {ROLE_NAME_MAX_LENGTH} characters")
    return name


class CreateRoleUseCase:
    """Create a new role with no permissions."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, data: RoleCreateInput) -> Role:
        """Create role. Actor must have roles:create."""
        await ensure_granted(self._permission_checker, actor_id, "roles:create")
        name = normalize_role_name(data.name)

        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(name):
                raise ValidationError(f"Role with name '{name}' already exists")

            now = datetime.now(UTC)
            role = Role(
                id=uuid4(),
                name=name,
                description=data.description,
                is_system=data.is_system,
                created_at=now,
                updated_at=now,
            )
            await uow.roles.create(role)
            await record_change(
                uow,
                AuditAction.CREATE_ROLE,
                "role",
                resource_id=role.id,
                performed_by=actor_id,
                changes={"name": name, "is_system": role.is_system},
            )

        logger.info("Role %s (%s) created by %s", role.name, role.id, actor_id)
        return role
