"""Seed permission catalog and baseline roles."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from workshop_rbac.application.dto.assignment_dto import AssignmentChange
from workshop_rbac.application.use_cases.seed.default_catalog import (
    DEFAULT_PERMISSIONS,
    DEFAULT_ROLES,
    PermissionSeed,
    RoleSeed,
)
from workshop_rbac.domain.entities import Permission, Role, RolePermission, UserRole
from workshop_rbac.domain.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class SeedReport:
    """What a seeding run changed."""

    created_permissions: list[str] = field(default_factory=list)
    created_roles: list[str] = field(default_factory=list)
    updated_roles: list[str] = field(default_factory=list)
    links_added: int = 0
    links_removed: int = 0

    @property
    def changed(self) -> bool:
        return bool(
            self.created_permissions
            or self.created_roles
            or self.updated_roles
            or self.links_added
            or self.links_removed
        )


class SeedCatalogUseCase:
    """Idempotently load the permission catalog and baseline roles.

    Rows are looked up by unique name before insert. Role descriptions and
    permission sets are reconciled to the seed definition by set difference,
    so re-running never duplicates rows.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        permissions: Sequence[PermissionSeed] = DEFAULT_PERMISSIONS,
        roles: Sequence[RoleSeed] = DEFAULT_ROLES,
    ) -> SeedReport:
        report = SeedReport()
        now = datetime.now(UTC)

        async with self._uow_factory() as uow:
            permission_ids: dict[str, UUID] = {}
            for seed in permissions:
                existing = await uow.permissions.get_by_name(seed.name)
                if existing:
                    permission_ids[seed.name] = existing.id
                    continue
                permission = Permission(
                    id=uuid4(),
                    name=seed.name,
                    resource=seed.resource,
                    action=seed.action,
                    description=seed.description,
                    created_at=now,
                )
                await uow.permissions.create(permission)
                permission_ids[seed.name] = permission.id
                report.created_permissions.append(seed.name)

            for seed in roles:
                unknown = [name for name in seed.permissions if name not in permission_ids]
                if unknown:
                    raise ValidationError(
                        f"Role '{seed.name}' references unknown permissions: {', '.join(unknown)}"
                    )

                role = await uow.roles.get_by_name(seed.name)
                if role is None:
                    role = Role(
                        id=uuid4(),
                        name=seed.name,
                        description=seed.description,
                        is_system=seed.is_system,
                        created_at=now,
                        updated_at=now,
                    )
                    await uow.roles.create(role)
                    report.created_roles.append(seed.name)
                elif role.description != seed.description:
                    role.description = seed.description
                    role.updated_at = now
                    await uow.roles.update(role)
                    report.updated_roles.append(seed.name)

                current = {link.permission_id for link in await uow.role_permissions.list_by_role(role.id)}
                change = AssignmentChange.diff(
                    current, {permission_ids[name] for name in seed.permissions}
                )
                for permission_id in change.removed:
                    await uow.role_permissions.remove(role.id, permission_id)
                for permission_id in change.added:
                    await uow.role_permissions.add(
                        RolePermission(role_id=role.id, permission_id=permission_id, created_at=now)
                    )
                report.links_added += len(change.added)
                report.links_removed += len(change.removed)

        logger.info(
            "Seed complete: %d permissions and %d roles created, %d roles updated, links +%d -%d",
            len(report.created_permissions),
            len(report.created_roles),
            len(report.updated_roles),
            report.links_added,
            report.links_removed,
        )
        return report


class AssignBootstrapRoleUseCase:
    """Give an existing user a role during bootstrap (no actor check).

    Used once to hand the first administrator the admin role; additive, so
    roles the user already holds are kept.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: UUID, role_name: str = "admin") -> bool:
        """Return True when the role was newly assigned."""
        async with self._uow_factory() as uow:
            if not await uow.users.get_by_id(user_id, for_update=True):
                raise NotFound("User", str(user_id))
            role = await uow.roles.get_by_name(role_name)
            if not role:
                raise NotFound("Role", role_name)
            held = {link.role_id for link in await uow.user_roles.list_by_user(user_id)}
            if role.id in held:
                return False
            await uow.user_roles.add(
                UserRole(user_id=user_id, role_id=role.id, created_at=datetime.now(UTC))
            )

        logger.info("Bootstrap: role %s assigned to user %s", role_name, user_id)
        return True
