"""Set role permissions use case."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from uuid import UUID

from workshop_rbac.application.audit import AuditAction, id_list, record_change
from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.dto.assignment_dto import AssignmentChange
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.domain.entities import RolePermission
from workshop_rbac.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class SetRolePermissionsUseCase:
    """Replace the complete permission set of a role.

    Computed as a set difference so links present before and after keep
    their original created_at.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self, actor_id: UUID, role_id: UUID, permission_ids: Iterable[UUID]
    ) -> AssignmentChange:
        """Set role permissions to exactly permission_ids. Actor must have permissions:grant."""
        await ensure_granted(self._permission_checker, actor_id, "permissions:grant")
        target = set(permission_ids)

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id, for_update=True)
            if not role:
                raise NotFound("Role", str(role_id))

            if target:
                found = await uow.permissions.get_many(target)
                missing = target - {p.id for p in found}
                if missing:
                    raise NotFound("Permission", ", ".join(id_list(missing)))

            current = {link.permission_id for link in await uow.role_permissions.list_by_role(role_id)}
            change = AssignmentChange.diff(current, target)
            if not change.changed:
                return change

            for permission_id in change.removed:
                await uow.role_permissions.remove(role_id, permission_id)
            now = datetime.now(UTC)
            for permission_id in change.added:
                await uow.role_permissions.add(
                    RolePermission(role_id=role_id, permission_id=permission_id, created_at=now)
                )
            await record_change(
                uow,
                AuditAction.SET_ROLE_PERMISSIONS,
                "role_permission",
                resource_id=role_id,
                performed_by=actor_id,
                changes={"added": id_list(change.added), "removed": id_list(change.removed)},
            )

        logger.info(
            "Role %s permissions set by %s: +%d -%d",
            role.name,
            actor_id,
            len(change.added),
            len(change.removed),
        )
        return change
