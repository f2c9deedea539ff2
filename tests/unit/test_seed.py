"""Unit tests for catalog seeding."""

from contextlib import asynccontextmanager
from uuid import uuid4

import pytest

from workshop_rbac.application.use_cases.seed.default_catalog import (
    DEFAULT_PERMISSIONS,
    DEFAULT_ROLES,
    PermissionSeed,
    RoleSeed,
)
from workshop_rbac.application.use_cases.seed.seed_catalog import (
    AssignBootstrapRoleUseCase,
    SeedCatalogUseCase,
)
from workshop_rbac.domain.entities import RolePermission
from workshop_rbac.domain.exceptions import NotFound, ValidationError
from workshop_rbac.infrastructure.permission.permission_resolver import PermissionResolver

from tests.conftest import FakeUnitOfWork


@pytest.fixture
def empty_uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def empty_factory(empty_uow):
    @asynccontextmanager
    async def _factory():
        yield empty_uow

    return _factory


def test_default_catalog_is_consistent() -> None:
    names = [p.name for p in DEFAULT_PERMISSIONS]
    assert len(names) == len(set(names))
    for role in DEFAULT_ROLES:
        assert set(role.permissions) <= set(names), role.name
    admin = next(r for r in DEFAULT_ROLES if r.name == "admin")
    assert set(admin.permissions) == set(names)
    assert {r.name for r in DEFAULT_ROLES} == {"sales", "technician", "manager", "finance", "admin"}


@pytest.mark.asyncio
async def test_seed_creates_catalog_and_roles(empty_uow, empty_factory) -> None:
    report = await SeedCatalogUseCase(empty_factory).execute()

    assert len(await empty_uow.permissions.list_all()) == len(DEFAULT_PERMISSIONS)
    assert sorted(report.created_roles) == sorted(r.name for r in DEFAULT_ROLES)
    tech = await empty_uow.roles.get_by_name("technician")
    assert tech.is_system
    assert report.links_added == sum(len(r.permissions) for r in DEFAULT_ROLES)


@pytest.mark.asyncio
async def test_seed_is_idempotent(empty_uow, empty_factory) -> None:
    use_case = SeedCatalogUseCase(empty_factory)
    await use_case.execute()
    links_before = len(empty_uow.role_permissions._links)

    report = await use_case.execute()

    assert not report.changed
    assert len(await empty_uow.permissions.list_all()) == len(DEFAULT_PERMISSIONS)
    assert len(await empty_uow.roles.list_all()) == len(DEFAULT_ROLES)
    assert len(empty_uow.role_permissions._links) == links_before


@pytest.mark.asyncio
async def test_seed_reconciles_drifted_role(empty_uow, empty_factory) -> None:
    use_case = SeedCatalogUseCase(empty_factory)
    await use_case.execute()
    tech = await empty_uow.roles.get_by_name("technician")
    tech.description = "edited"
    await empty_uow.role_permissions.remove(tech.id, empty_uow.permission("parts:read").id)
    await empty_uow.role_permissions.add(
        RolePermission(
            role_id=tech.id,
            permission_id=empty_uow.permission("payments:refund").id,
            created_at=tech.created_at,
        )
    )

    report = await use_case.execute()

    assert report.updated_roles == ["technician"]
    assert report.links_added == 1
    assert report.links_removed == 1
    names = {
        (await empty_uow.permissions.get_by_id(link.permission_id)).name
        for link in await empty_uow.role_permissions.list_by_role(tech.id)
    }
    technician_seed = next(r for r in DEFAULT_ROLES if r.name == "technician")
    assert names == set(technician_seed.permissions)


@pytest.mark.asyncio
async def test_seed_rejects_unknown_permission(empty_factory) -> None:
    with pytest.raises(ValidationError, match="unknown permissions"):
        await SeedCatalogUseCase(empty_factory).execute(
            permissions=[PermissionSeed("bikes", "read", "View bikes")],
            roles=[RoleSeed("clerk", "Clerk", ("bikes:read", "bikes:fly"))],
        )


@pytest.mark.asyncio
async def test_seeded_technician_resolves(empty_uow, empty_factory) -> None:
    await SeedCatalogUseCase(empty_factory).execute()
    tech = await empty_uow.roles.get_by_name("technician")
    user = empty_uow.add_user(tech)
    resolver = PermissionResolver(empty_factory)

    assert await resolver.is_granted(user.id, "service_orders:read") is True
    assert await resolver.is_granted(user.id, "service_orders:delete") is False


@pytest.mark.asyncio
async def test_bootstrap_admin(empty_uow, empty_factory) -> None:
    await SeedCatalogUseCase(empty_factory).execute()
    user = empty_uow.add_user()
    use_case = AssignBootstrapRoleUseCase(empty_factory)

    assert await use_case.execute(user.id) is True
    assert await use_case.execute(user.id) is False
    assert await PermissionResolver(empty_factory).is_granted(user.id, "roles:delete") is True


@pytest.mark.asyncio
async def test_bootstrap_unknown_user(empty_factory) -> None:
    await SeedCatalogUseCase(empty_factory).execute()
    with pytest.raises(NotFound, match="User"):
        await AssignBootstrapRoleUseCase(empty_factory).execute(uuid4())
