"""Set user roles use case."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from uuid import UUID

from workshop_rbac.application.audit import AuditAction, id_list, record_change
from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.dto.assignment_dto import AssignmentChange
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.domain.entities import UserRole
from workshop_rbac.domain.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)


class SetUserRolesUseCase:
    """Replace a user's complete role membership.

    A user must keep at least one role; an empty target is rejected before
    anything is written.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self, actor_id: UUID, user_id: UUID, role_ids: Iterable[UUID]
    ) -> AssignmentChange:
        """Set user roles to exactly role_ids. Actor must have roles:grant."""
        await ensure_granted(self._permission_checker, actor_id, "roles:grant")
        target = set(role_ids)
        if not target:
            raise ValidationError("A user must hold at least one role")

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id, for_update=True)
            if not user:
                raise NotFound("User", str(user_id))

            found = await uow.roles.get_many(target)
            missing = target - {r.id for r in found}
            if missing:
                raise NotFound("Role", ", ".join(id_list(missing)))

            current = {link.role_id for link in await uow.user_roles.list_by_user(user_id)}
            change = AssignmentChange.diff(current, target)
            if not change.changed:
                return change

            for role_id in change.removed:
                await uow.user_roles.remove(user_id, role_id)
            now = datetime.now(UTC)
            for role_id in change.added:
                await uow.user_roles.add(
                    UserRole(user_id=user_id, role_id=role_id, created_at=now, assigned_by=actor_id)
                )
            await record_change(
                uow,
                AuditAction.SET_USER_ROLES,
                "user_role",
                resource_id=user_id,
                user_id=user_id,
                performed_by=actor_id,
                changes={"added": id_list(change.added), "removed": id_list(change.removed)},
            )

        logger.info(
            "User %s roles set by %s: +%d -%d",
            user_id,
            actor_id,
            len(change.added),
            len(change.removed),
        )
        return change
