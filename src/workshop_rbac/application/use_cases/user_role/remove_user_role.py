"""Remove a single role from a user."""

import logging
from uuid import UUID

from workshop_rbac.application.audit import AuditAction, record_change
from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.domain.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)


class RemoveUserRoleUseCase:
    """Take one role away from a user, never the last one."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, user_id: UUID, role_id: UUID) -> None:
        await ensure_granted(self._permission_checker, actor_id, "roles:revoke")

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id, for_update=True)
            if not user:
                raise NotFound("User", str(user_id))

            held = {link.role_id for link in await uow.user_roles.list_by_user(user_id)}
            if role_id not in held:
                raise NotFound("UserRole", f"{user_id}/{role_id}")
            if held == {role_id}:
                raise ValidationError("A user must hold at least one role")

            await uow.user_roles.remove(user_id, role_id)
            await record_change(
                uow,
                AuditAction.REMOVE_USER_ROLE,
                "user_role",
                resource_id=user_id,
                user_id=user_id,
                performed_by=actor_id,
                changes={"removed": [str(role_id)]},
            )

        logger.info("Role %s removed from user %s by %s", role_id, user_id, actor_id)
