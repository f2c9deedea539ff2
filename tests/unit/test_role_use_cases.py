"""Unit tests for role use cases."""

from uuid import uuid4

import pytest

from workshop_rbac.application.dto.role_dto import RoleCreateInput, RoleUpdateInput
from workshop_rbac.application.use_cases.role.create_role import CreateRoleUseCase
from workshop_rbac.application.use_cases.role.delete_role import DeleteRoleUseCase
from workshop_rbac.application.use_cases.role.remove_role_permission import (
    RemoveRolePermissionUseCase,
)
from workshop_rbac.application.use_cases.role.set_role_permissions import (
    SetRolePermissionsUseCase,
)
from workshop_rbac.application.use_cases.role.update_role import UpdateRoleUseCase
from workshop_rbac.domain.exceptions import NotFound, PermissionDenied, ValidationError
from workshop_rbac.infrastructure.permission.permission_resolver import PermissionResolver


# --- CreateRoleUseCase ---


@pytest.mark.asyncio
async def test_create_role(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    use_case = CreateRoleUseCase(uow_factory, mock_permission_checker)

    role = await use_case.execute(actor_id, RoleCreateInput(name="  parts_clerk ", description="Parts"))

    assert role.name == "parts_clerk"
    assert role.is_system is False
    assert await fake_uow.roles.get_by_name("parts_clerk") is role
    assert await fake_uow.role_permissions.list_by_role(role.id) == []
    assert fake_uow.audit_logs.actions() == ["create_role"]
    mock_permission_checker.check.assert_awaited_with(actor_id, "roles:create")


@pytest.mark.asyncio
async def test_create_role_duplicate_name(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    fake_uow.add_role("sales")
    use_case = CreateRoleUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(ValidationError, match="already exists"):
        await use_case.execute(actor_id, RoleCreateInput(name="sales"))


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", "x" * 101, 123])
async def test_create_role_invalid_name(uow_factory, mock_permission_checker, actor_id, name) -> None:
    use_case = CreateRoleUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(ValidationError):
        await use_case.execute(actor_id, RoleCreateInput(name=name))


@pytest.mark.asyncio
async def test_create_role_denied(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    mock_permission_checker.check.return_value = False
    use_case = CreateRoleUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(PermissionDenied):
        await use_case.execute(actor_id, RoleCreateInput(name="parts_clerk"))
    assert await fake_uow.roles.list_all() == []


# --- UpdateRoleUseCase ---


@pytest.mark.asyncio
async def test_update_role_rename_and_describe(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    role = fake_uow.add_role("parts")
    use_case = UpdateRoleUseCase(uow_factory, mock_permission_checker)

    updated = await use_case.execute(
        actor_id, role.id, RoleUpdateInput(name="parts_clerk", description="Parts desk")
    )

    assert updated.name == "parts_clerk"
    assert updated.description == "Parts desk"
    entry = fake_uow.audit_logs.entries[-1]
    assert entry.action == "update_role"
    assert entry.changes["name"] == {"from": "parts", "to": "parts_clerk"}


@pytest.mark.asyncio
async def test_update_role_no_change_not_audited(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    role = fake_uow.add_role("parts")
    use_case = UpdateRoleUseCase(uow_factory, mock_permission_checker)

    await use_case.execute(actor_id, role.id, RoleUpdateInput(name="parts"))

    assert fake_uow.audit_logs.entries == []


@pytest.mark.asyncio
async def test_update_role_rename_taken(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    fake_uow.add_role("sales")
    role = fake_uow.add_role("parts")
    use_case = UpdateRoleUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(ValidationError, match="already exists"):
        await use_case.execute(actor_id, role.id, RoleUpdateInput(name="sales"))


@pytest.mark.asyncio
async def test_update_system_role(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    role = fake_uow.add_role("technician", is_system=True)
    use_case = UpdateRoleUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(ValidationError, match="system"):
        await use_case.execute(actor_id, role.id, RoleUpdateInput(name="mechanic"))

    updated = await use_case.execute(actor_id, role.id, RoleUpdateInput(description="Workshop floor"))
    assert updated.name == "technician"
    assert updated.description == "Workshop floor"


@pytest.mark.asyncio
async def test_update_unknown_role(uow_factory, mock_permission_checker, actor_id) -> None:
    use_case = UpdateRoleUseCase(uow_factory, mock_permission_checker)
    with pytest.raises(NotFound, match="Role"):
        await use_case.execute(actor_id, uuid4(), RoleUpdateInput(name="x"))


# --- DeleteRoleUseCase ---


@pytest.mark.asyncio
async def test_delete_system_role_rejected(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    role = fake_uow.add_role("admin", "reports:read", is_system=True)
    use_case = DeleteRoleUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(ValidationError, match="system"):
        await use_case.execute(actor_id, role.id, force=True)
    assert await fake_uow.roles.get_by_id(role.id) is role
    assert len(await fake_uow.role_permissions.list_by_role(role.id)) == 1


@pytest.mark.asyncio
async def test_delete_role_with_members_requires_force(
    fake_uow, uow_factory, mock_permission_checker, actor_id
) -> None:
    role = fake_uow.add_role("night_shift", "service_orders:read")
    fake_uow.add_user(role)
    use_case = DeleteRoleUseCase(uow_factory, mock_permission_checker)

    with pytest.raises(ValidationError, match="held by 1 user"):
        await use_case.execute(actor_id, role.id)
    assert await fake_uow.roles.get_by_id(role.id) is role


@pytest.mark.asyncio
async def test_delete_role_removes_links_and_membership(
    fake_uow, uow_factory, mock_permission_checker, actor_id
) -> None:
    keep = fake_uow.add_role("sales", "customers:read")
    role = fake_uow.add_role("night_shift", "service_orders:read", "reports:read")
    user = fake_uow.add_user(keep, role)
    resolver = PermissionResolver(uow_factory)
    assert await resolver.is_granted(user.id, "service_orders:read") is True

    await DeleteRoleUseCase(uow_factory, mock_permission_checker).execute(
        actor_id, role.id, force=True
    )

    assert await fake_uow.roles.get_by_id(role.id) is None
    assert await fake_uow.role_permissions.list_by_role(role.id) == []
    assert [m.role_id for m in await fake_uow.user_roles.list_by_user(user.id)] == [keep.id]
    assert await resolver.is_granted(user.id, "service_orders:read") is False
    entry = fake_uow.audit_logs.entries[-1]
    assert entry.action == "delete_role"
    assert entry.changes["removed_permission_links"] == 2
    assert entry.changes["revoked_from_users"] == [str(user.id)]


@pytest.mark.asyncio
async def test_delete_role_without_members(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    role = fake_uow.add_role("unused", "reports:read")

    await DeleteRoleUseCase(uow_factory, mock_permission_checker).execute(actor_id, role.id)

    assert await fake_uow.roles.get_by_id(role.id) is None


@pytest.mark.asyncio
async def test_delete_unknown_role(uow_factory, mock_permission_checker, actor_id) -> None:
    with pytest.raises(NotFound):
        await DeleteRoleUseCase(uow_factory, mock_permission_checker).execute(actor_id, uuid4())


# --- SetRolePermissionsUseCase ---


@pytest.mark.asyncio
async def test_set_role_permissions_exact_set(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    role = fake_uow.add_role("technician", "service_orders:read", "customers:read")
    target = {fake_uow.permission("service_orders:read").id, fake_uow.permission("reports:read").id}
    use_case = SetRolePermissionsUseCase(uow_factory, mock_permission_checker)

    change = await use_case.execute(actor_id, role.id, target)

    links = await fake_uow.role_permissions.list_by_role(role.id)
    assert {link.permission_id for link in links} == target
    assert change.added == {fake_uow.permission("reports:read").id}
    assert change.removed == {fake_uow.permission("customers:read").id}
    mock_permission_checker.check.assert_awaited_with(actor_id, "permissions:grant")


@pytest.mark.asyncio
async def test_set_role_permissions_keeps_untouched_links(
    fake_uow, uow_factory, mock_permission_checker, actor_id
) -> None:
    role = fake_uow.add_role("technician", "service_orders:read")
    original = (await fake_uow.role_permissions.list_by_role(role.id))[0]

    await SetRolePermissionsUseCase(uow_factory, mock_permission_checker).execute(
        actor_id, role.id, [original.permission_id, fake_uow.permission("reports:read").id]
    )

    links = {link.permission_id: link for link in await fake_uow.role_permissions.list_by_role(role.id)}
    assert links[original.permission_id].created_at == original.created_at


@pytest.mark.asyncio
async def test_set_role_permissions_idempotent(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    role = fake_uow.add_role("technician")
    target = [fake_uow.permission("service_orders:read").id, fake_uow.permission("service_orders:update").id]
    use_case = SetRolePermissionsUseCase(uow_factory, mock_permission_checker)

    first = await use_case.execute(actor_id, role.id, target)
    second = await use_case.execute(actor_id, role.id, target + target)

    assert first.changed and not second.changed
    assert len(await fake_uow.role_permissions.list_by_role(role.id)) == 2
    assert fake_uow.audit_logs.actions() == ["set_role_permissions"]


@pytest.mark.asyncio
async def test_set_role_permissions_empty_clears(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    role = fake_uow.add_role("technician", "service_orders:read")

    await SetRolePermissionsUseCase(uow_factory, mock_permission_checker).execute(actor_id, role.id, [])

    assert await fake_uow.role_permissions.list_by_role(role.id) == []


@pytest.mark.asyncio
async def test_set_role_permissions_unknown_permission(
    fake_uow, uow_factory, mock_permission_checker, actor_id
) -> None:
    role = fake_uow.add_role("technician", "service_orders:read")

    with pytest.raises(NotFound, match="Permission"):
        await SetRolePermissionsUseCase(uow_factory, mock_permission_checker).execute(
            actor_id, role.id, [uuid4()]
        )
    assert len(await fake_uow.role_permissions.list_by_role(role.id)) == 1


@pytest.mark.asyncio
async def test_set_role_permissions_unknown_role(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    with pytest.raises(NotFound, match="Role"):
        await SetRolePermissionsUseCase(uow_factory, mock_permission_checker).execute(
            actor_id, uuid4(), [fake_uow.permission("reports:read").id]
        )


# --- RemoveRolePermissionUseCase ---


@pytest.mark.asyncio
async def test_remove_role_permission(fake_uow, uow_factory, mock_permission_checker, actor_id) -> None:
    role = fake_uow.add_role("technician", "service_orders:read", "customers:read")
    use_case = RemoveRolePermissionUseCase(uow_factory, mock_permission_checker)
    pid = fake_uow.permission("customers:read").id

    await use_case.execute(actor_id, role.id, pid)

    assert [link.permission_id for link in await fake_uow.role_permissions.list_by_role(role.id)] == [
        fake_uow.permission("service_orders:read").id
    ]
    with pytest.raises(NotFound, match="RolePermission"):
        await use_case.execute(actor_id, role.id, pid)
