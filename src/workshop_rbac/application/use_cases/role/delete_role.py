"""Delete role use case."""

import logging
from uuid import UUID

from workshop_rbac.application.audit import AuditAction, id_list, record_change
from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.domain.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """Delete a non-system role together with its links.

    Cleanup is explicit: role-permission links, then memberships, then the
    role, all in one unit of work. A role that is still held by users is only
    deleted when the caller confirms with ``force=True``.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, role_id: UUID, *, force: bool = False) -> None:
        """Delete role. Actor must have roles:delete."""
        await ensure_granted(self._permission_checker, actor_id, "roles:delete")

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id, for_update=True)
            if not role:
                raise NotFound("Role", str(role_id))
            if role.is_system:
                raise ValidationError("Cannot delete system roles")

            members = await uow.user_roles.list_by_role(role_id)
            if members and not force:
                raise ValidationError(
                    f"Role '{role.name}' is held by {len(members)} user(s); "
                    "confirm deletion to revoke it from them"
                )

            removed_links = await uow.role_permissions.delete_by_role(role_id)
            removed_members = await uow.user_roles.delete_by_role(role_id)
            await uow.roles.delete(role_id)
            await record_change(
                uow,
                AuditAction.DELETE_ROLE,
                "role",
                resource_id=role_id,
                performed_by=actor_id,
                changes={
                    "name": role.name,
                    "removed_permission_links": removed_links,
                    "revoked_from_users": id_list(m.user_id for m in members),
                },
            )

        logger.info(
            "Role %s (%s) deleted by %s; %d permission links, %d memberships removed",
            role.name,
            role_id,
            actor_id,
            removed_links,
            removed_members,
        )
