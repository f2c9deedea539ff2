"""Pytest fixtures for workshop RBAC tests."""

from __future__ import annotations

from collections.abc import Collection
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from workshop_rbac.domain.entities import (
    AuditLogEntry,
    Permission,
    Role,
    RolePermission,
    User,
    UserPermission,
    UserRole,
)


# --- Fake repositories ---


class FakeRolePermissionRepository:
    """In-memory role-permission links keyed by (role_id, permission_id)."""

    def __init__(self) -> None:
        self._links: dict[tuple[UUID, UUID], RolePermission] = {}

    async def list_by_role(self, role_id: UUID) -> list[RolePermission]:
        return [link for (rid, _), link in self._links.items() if rid == role_id]

    async def list_by_roles(self, role_ids: Collection[UUID]) -> list[RolePermission]:
        wanted = set(role_ids)
        return [link for (rid, _), link in self._links.items() if rid in wanted]

    async def add(self, link: RolePermission) -> None:
        self._links[(link.role_id, link.permission_id)] = link

    async def remove(self, role_id: UUID, permission_id: UUID) -> bool:
        return self._links.pop((role_id, permission_id), None) is not None

    async def delete_by_role(self, role_id: UUID) -> int:
        keys = [k for k in self._links if k[0] == role_id]
        for k in keys:
            del self._links[k]
        return len(keys)

    def references(self, permission_id: UUID) -> bool:
        return any(pid == permission_id for _, pid in self._links)


class FakeUserPermissionRepository:
    """In-memory overrides keyed by (user_id, permission_id)."""

    def __init__(self) -> None:
        self._by_key: dict[tuple[UUID, UUID], UserPermission] = {}

    async def get(self, user_id: UUID, permission_id: UUID) -> UserPermission | None:
        return self._by_key.get((user_id, permission_id))

    async def list_by_user(self, user_id: UUID) -> list[UserPermission]:
        return [o for (uid, _), o in self._by_key.items() if uid == user_id]

    async def upsert(self, override: UserPermission) -> UserPermission:
        self._by_key[(override.user_id, override.permission_id)] = override
        return override

    async def delete(self, user_id: UUID, permission_id: UUID) -> bool:
        return self._by_key.pop((user_id, permission_id), None) is not None

    def references(self, permission_id: UUID) -> bool:
        return any(pid == permission_id for _, pid in self._by_key)


class FakePermissionRepository:
    """In-memory permission catalog."""

    def __init__(
        self,
        role_permissions: FakeRolePermissionRepository,
        user_permissions: FakeUserPermissionRepository,
    ) -> None:
        self._by_id: dict[UUID, Permission] = {}
        self._role_permissions = role_permissions
        self._user_permissions = user_permissions

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        return self._by_id.get(permission_id)

    async def get_by_name(self, name: str) -> Permission | None:
        for p in self._by_id.values():
            if p.name == name:
                return p
        return None

    async def get_many(self, permission_ids: Collection[UUID]) -> list[Permission]:
        return [self._by_id[pid] for pid in set(permission_ids) if pid in self._by_id]

    async def list_all(self) -> list[Permission]:
        return sorted(self._by_id.values(), key=lambda p: (p.resource, p.action))

    async def list_by_resource(self, resource: str) -> list[Permission]:
        return [p for p in await self.list_all() if p.resource == resource]

    async def create(self, permission: Permission) -> Permission:
        self._by_id[permission.id] = permission
        return permission

    async def delete(self, permission_id: UUID) -> None:
        self._by_id.pop(permission_id, None)

    async def is_referenced(self, permission_id: UUID) -> bool:
        return self._role_permissions.references(permission_id) or self._user_permissions.references(
            permission_id
        )


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Role] = {}

    async def get_by_id(self, role_id: UUID, *, for_update: bool = False) -> Role | None:
        return self._by_id.get(role_id)

    async def get_by_name(self, name: str) -> Role | None:
        for r in self._by_id.values():
            if r.name == name:
                return r
        return None

    async def get_many(self, role_ids: Collection[UUID]) -> list[Role]:
        return [self._by_id[rid] for rid in set(role_ids) if rid in self._by_id]

    async def list_all(self) -> list[Role]:
        return sorted(self._by_id.values(), key=lambda r: r.name)

    async def create(self, role: Role) -> Role:
        self._by_id[role.id] = role
        return role

    async def update(self, role: Role) -> None:
        self._by_id[role.id] = role

    async def delete(self, role_id: UUID) -> None:
        self._by_id.pop(role_id, None)


class FakeUserRepository:
    """In-memory user directory."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, User] = {}

    async def get_by_id(self, user_id: UUID, *, for_update: bool = False) -> User | None:
        return self._by_id.get(user_id)

    def add_user(self, user: User) -> None:
        """Helper to add user for tests."""
        self._by_id[user.id] = user


class FakeUserRoleRepository:
    """In-memory user-role memberships."""

    def __init__(self) -> None:
        self._links: dict[tuple[UUID, UUID], UserRole] = {}

    async def list_by_user(self, user_id: UUID) -> list[UserRole]:
        return [link for (uid, _), link in self._links.items() if uid == user_id]

    async def list_by_role(self, role_id: UUID) -> list[UserRole]:
        return [link for (_, rid), link in self._links.items() if rid == role_id]

    async def add(self, link: UserRole) -> None:
        self._links[(link.user_id, link.role_id)] = link

    async def remove(self, user_id: UUID, role_id: UUID) -> bool:
        return self._links.pop((user_id, role_id), None) is not None

    async def delete_by_role(self, role_id: UUID) -> int:
        keys = [k for k in self._links if k[1] == role_id]
        for k in keys:
            del self._links[k]
        return len(keys)


class FakeAuditLogRepository:
    """In-memory audit log."""

    def __init__(self) -> None:
        self.entries: list[AuditLogEntry] = []

    async def create(self, entry: AuditLogEntry) -> AuditLogEntry:
        self.entries.append(entry)
        return entry

    async def list(
        self, *, user_id: UUID | None = None, limit: int = 100, offset: int = 0
    ) -> list[AuditLogEntry]:
        items = [e for e in reversed(self.entries) if user_id is None or e.user_id == user_id]
        return items[offset : offset + limit]

    def actions(self) -> list[str]:
        return [e.action for e in self.entries]


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories and seeding helpers."""

    def __init__(self) -> None:
        self.role_permissions = FakeRolePermissionRepository()
        self.user_permissions = FakeUserPermissionRepository()
        self.permissions = FakePermissionRepository(self.role_permissions, self.user_permissions)
        self.roles = FakeRoleRepository()
        self.users = FakeUserRepository()
        self.user_roles = FakeUserRoleRepository()
        self.audit_logs = FakeAuditLogRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass

    # Helpers below write straight into the stores, bypassing use cases.

    def add_permission(self, name: str, description: str | None = None) -> Permission:
        resource, _, action = name.partition(":")
        p = Permission(
            id=uuid4(),
            name=name,
            resource=resource,
            action=action,
            description=description,
            created_at=datetime.now(UTC),
        )
        self.permissions._by_id[p.id] = p
        return p

    def permission(self, name: str) -> Permission:
        return next(p for p in self.permissions._by_id.values() if p.name == name)

    def add_role(self, name: str, *permission_names: str, is_system: bool = False) -> Role:
        now = datetime.now(UTC)
        role = Role(
            id=uuid4(),
            name=name,
            description=f"{name} role",
            is_system=is_system,
            created_at=now,
            updated_at=now,
        )
        self.roles._by_id[role.id] = role
        for pname in permission_names:
            pid = self.permission(pname).id
            self.role_permissions._links[(role.id, pid)] = RolePermission(
                role_id=role.id, permission_id=pid, created_at=now
            )
        return role

    def add_user(self, *roles: Role, user_id: UUID | None = None) -> User:
        user = User(id=user_id or uuid4(), full_name="Test User", email="user@example.com")
        self.users.add_user(user)
        for role in roles:
            self.user_roles._links[(user.id, role.id)] = UserRole(
                user_id=user.id, role_id=role.id, created_at=datetime.now(UTC)
            )
        return user

    def set_override(self, user: User, permission_name: str, granted: bool) -> UserPermission:
        o = UserPermission(
            user_id=user.id,
            permission_id=self.permission(permission_name).id,
            granted=granted,
            assigned_at=datetime.now(UTC),
        )
        self.user_permissions._by_key[(o.user_id, o.permission_id)] = o
        return o


WORKSHOP_PERMISSIONS = (
    "service_orders:create",
    "service_orders:read",
    "service_orders:update",
    "service_orders:delete",
    "reports:read",
    "reports:export",
    "customers:read",
)


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Shared in-memory UnitOfWork with a small workshop catalog."""
    uow = FakeUnitOfWork()
    for name in WORKSHOP_PERMISSIONS:
        uow.add_permission(name)
    return uow


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager - same UoW for every call in a test."""

    @asynccontextmanager
    async def _factory():
        yield fake_uow

    return _factory


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - check() returns True by default."""
    mock = AsyncMock()
    mock.check.return_value = True
    return mock


@pytest.fixture
def actor_id() -> UUID:
    return uuid4()
