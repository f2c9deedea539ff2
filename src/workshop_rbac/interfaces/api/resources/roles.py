"""Role API resources."""

import falcon.asgi

from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.dto.role_dto import RoleCreateInput, RoleUpdateInput
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.application.use_cases.role.create_role import CreateRoleUseCase
from workshop_rbac.application.use_cases.role.delete_role import DeleteRoleUseCase
from workshop_rbac.application.use_cases.role.remove_role_permission import (
    RemoveRolePermissionUseCase,
)
from workshop_rbac.application.use_cases.role.set_role_permissions import (
    SetRolePermissionsUseCase,
)
from workshop_rbac.application.use_cases.role.update_role import UpdateRoleUseCase
from workshop_rbac.domain.exceptions import NotFound
from workshop_rbac.interfaces.api.resources._common import (
    parse_uuid,
    parse_uuid_list,
    require_user,
)
from workshop_rbac.interfaces.api.serializers import permission_to_dict, role_to_dict


class RolesResource:
    """GET/POST /v1/roles - list and create roles."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        create_role: CreateRoleUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._create = create_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List roles with their permission names and member count."""
        user = require_user(req, resp)
        if not user:
            return
        await ensure_granted(self._permission_checker, user.user_id, "roles:read")

        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()
            names = {p.id: p.name for p in await uow.permissions.list_all()}
            items = []
            for role in roles:
                links = await uow.role_permissions.list_by_role(role.id)
                members = await uow.user_roles.list_by_role(role.id)
                items.append(
                    role_to_dict(
                        role,
                        permissions=sorted(
                            names[link.permission_id]
                            for link in links
                            if link.permission_id in names
                        ),
                        user_count=len(members),
                    )
                )

        resp.media = {"items": items}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create a custom role."""
        user = require_user(req, resp)
        if not user:
            return

        try:
            body = await req.get_media()
            data = RoleCreateInput(
                name=body["name"],
                description=body.get("description"),
            )
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        if not isinstance(data.description, (str, type(None))):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "description must be a string"}
            return

        role = await self._create.execute(user.user_id, data)
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_201


class RoleResource:
    """GET/PATCH/DELETE /v1/roles/{role_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        update_role: UpdateRoleUseCase,
        delete_role: DeleteRoleUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._update = update_role
        self._delete = delete_role

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Role with its permissions and member user ids."""
        user = require_user(req, resp)
        if not user:
            return
        rid = parse_uuid(resp, role_id, "role")
        if not rid:
            return
        await ensure_granted(self._permission_checker, user.user_id, "roles:read")

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(rid)
            if not role:
                raise NotFound("Role", role_id)
            links = await uow.role_permissions.list_by_role(rid)
            permissions = await uow.permissions.get_many([link.permission_id for link in links])
            members = await uow.user_roles.list_by_role(rid)

        permissions.sort(key=lambda p: (p.resource, p.action))
        resp.media = role_to_dict(
            role,
            permissions=[permission_to_dict(p) for p in permissions],
            user_ids=sorted(str(m.user_id) for m in members),
        )
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Rename a role or change its description."""
        user = require_user(req, resp)
        if not user:
            return
        rid = parse_uuid(resp, role_id, "role")
        if not rid:
            return

        body = await req.get_media()
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Expected a JSON object"}
            return
        for field in ("name", "description"):
            if not isinstance(body.get(field), (str, type(None))):
                resp.status = falcon.HTTP_400
                resp.media = {"error": f"{field} must be a string"}
                return
        data = RoleUpdateInput(name=body.get("name"), description=body.get("description"))

        role = await self._update.execute(user.user_id, rid, data)
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Delete a custom role; ?force=true when it still has members."""
        user = require_user(req, resp)
        if not user:
            return
        rid = parse_uuid(resp, role_id, "role")
        if not rid:
            return

        force = req.get_param_as_bool("force") or False
        await self._delete.execute(user.user_id, rid, force=force)
        resp.status = falcon.HTTP_204


class RolePermissionsResource:
    """PUT /v1/roles/{role_id}/permissions - replace a role's permission set."""

    def __init__(self, set_role_permissions: SetRolePermissionsUseCase) -> None:
        self._set = set_role_permissions

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return
        rid = parse_uuid(resp, role_id, "role")
        if not rid:
            return

        body = await req.get_media()
        permission_ids = parse_uuid_list(
            resp, body.get("permission_ids") if isinstance(body, dict) else None, "permission"
        )
        if permission_ids is None:
            return

        change = await self._set.execute(user.user_id, rid, permission_ids)
        resp.media = {
            "role_id": role_id,
            "permission_ids": sorted(str(p) for p in change.target),
            "added": sorted(str(p) for p in change.added),
            "removed": sorted(str(p) for p in change.removed),
        }
        resp.status = falcon.HTTP_200


class RolePermissionResource:
    """DELETE /v1/roles/{role_id}/permissions/{permission_id}."""

    def __init__(self, remove_role_permission: RemoveRolePermissionUseCase) -> None:
        self._remove = remove_role_permission

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
        permission_id: str,
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return
        rid = parse_uuid(resp, role_id, "role")
        if not rid:
            return
        pid = parse_uuid(resp, permission_id, "permission")
        if not pid:
            return

        await self._remove.execute(user.user_id, rid, pid)
        resp.status = falcon.HTTP_204
