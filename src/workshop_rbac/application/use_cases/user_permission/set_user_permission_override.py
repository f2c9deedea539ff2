"""Set user permission override use case."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from uuid import UUID

from workshop_rbac.application.audit import AuditAction, id_list, record_change
from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.domain.entities import UserPermission
from workshop_rbac.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class SetUserPermissionOverrideUseCase:
    """Explicitly grant or deny permissions to a user, regardless of roles.

    Upserts: an existing override for the same (user, permission) is replaced.
    Overrides may target permissions that no role grants.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self, actor_id: UUID, user_id: UUID, permission_id: UUID, granted: bool
    ) -> UserPermission:
        """Set one override. Actor must have permissions:grant."""
        overrides = await self.execute_many(actor_id, user_id, [permission_id], granted)
        return overrides[0]

    async def execute_many(
        self,
        actor_id: UUID,
        user_id: UUID,
        permission_ids: Iterable[UUID],
        granted: bool,
    ) -> list[UserPermission]:
        """Set the same override direction on several permissions atomically."""
        await ensure_granted(self._permission_checker, actor_id, "permissions:grant")
        target = list(dict.fromkeys(permission_ids))
        if not target:
            return []

        async with self._uow_factory() as uow:
            if not await uow.users.get_by_id(user_id):
                raise NotFound("User", str(user_id))
            found = await uow.permissions.get_many(target)
            missing = set(target) - {p.id for p in found}
            if missing:
                raise NotFound("Permission", ", ".join(id_list(missing)))

            now = datetime.now(UTC)
            results = [
                await uow.user_permissions.upsert(
                    UserPermission(
                        user_id=user_id,
                        permission_id=permission_id,
                        granted=granted,
                        assigned_at=now,
                        assigned_by=actor_id,
                    )
                )
                for permission_id in target
            ]
            await record_change(
                uow,
                AuditAction.GRANT_USER_PERMISSION if granted else AuditAction.DENY_USER_PERMISSION,
                "user_permission",
                resource_id=user_id,
                user_id=user_id,
                performed_by=actor_id,
                changes={"permission_ids": id_list(target), "granted": granted},
            )

        logger.info(
            "User %s override %s on %d permission(s) by %s",
            user_id,
            "grant" if granted else "deny",
            len(target),
            actor_id,
        )
        return results
