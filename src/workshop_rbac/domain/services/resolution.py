"""Effective permission resolution.

A permission's effective status combines two signals:

* the role-derived signal: granted when at least one of the user's roles
  links to the permission;
* the override signal: an explicit per-user grant or deny, or absent.

An override, when present, wins in either direction. Without one the
role-derived signal decides. No role name is treated specially here; a role
is as powerful as the links it holds.
"""

from collections.abc import Iterable
from uuid import UUID

from workshop_rbac.domain.entities import (
    MatrixEntry,
    Permission,
    PermissionMatrix,
    Role,
    RolePermission,
    UserPermission,
)
from workshop_rbac.domain.value_objects import OverrideSignal, RoleDerivedSignal


def resolve(role_signal: RoleDerivedSignal, override: OverrideSignal) -> bool:
    """Combine role-derived and override signals into the effective status."""
    if override is OverrideSignal.GRANT:
        return True
    if override is OverrideSignal.DENY:
        return False
    return role_signal.granted


def index_role_grants(
    roles: Iterable[Role], links: Iterable[RolePermission]
) -> dict[UUID, tuple[str, ...]]:
    """Build permission_id -> names of granting roles, from the held roles only.

    Links of roles not in ``roles`` are ignored. Role names are sorted so
    provenance is stable across calls.
    """
    names_by_role = {r.id: r.name for r in roles}
    index: dict[UUID, set[str]] = {}
    for link in links:
        role_name = names_by_role.get(link.role_id)
        if role_name is None:
            continue
        index.setdefault(link.permission_id, set()).add(role_name)
    return {pid: tuple(sorted(names)) for pid, names in index.items()}


def role_signal_for(
    permission_id: UUID, role_grants: dict[UUID, tuple[str, ...]]
) -> RoleDerivedSignal:
    return RoleDerivedSignal(role_names=role_grants.get(permission_id, ()))


def override_signal_for(
    permission_id: UUID, overrides: dict[UUID, UserPermission]
) -> OverrideSignal:
    override = overrides.get(permission_id)
    return OverrideSignal.from_granted(override.granted if override else None)


def build_matrix(
    user_id: UUID,
    catalog: Iterable[Permission],
    roles: Iterable[Role],
    links: Iterable[RolePermission],
    overrides: Iterable[UserPermission],
) -> PermissionMatrix:
    """Build the effective matrix in a single pass over the catalog."""
    role_grants = index_role_grants(roles, links)
    overrides_by_permission = {o.permission_id: o for o in overrides if o.user_id == user_id}

    entries = []
    for permission in sorted(catalog, key=lambda p: (p.resource, p.action)):
        role_signal = role_signal_for(permission.id, role_grants)
        override = override_signal_for(permission.id, overrides_by_permission)
        entries.append(
            MatrixEntry(
                permission=permission,
                effective_status=resolve(role_signal, override),
                granted_by_roles=role_signal.role_names,
                override=override,
            )
        )
    return PermissionMatrix(user_id=user_id, entries=entries)
