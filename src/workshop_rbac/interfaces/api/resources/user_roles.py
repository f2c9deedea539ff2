"""User role membership API resources."""

import falcon.asgi

from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.application.use_cases.user_role.remove_user_role import RemoveUserRoleUseCase
from workshop_rbac.application.use_cases.user_role.set_user_roles import SetUserRolesUseCase
from workshop_rbac.domain.exceptions import NotFound
from workshop_rbac.interfaces.api.resources._common import (
    parse_uuid,
    parse_uuid_list,
    require_user,
)


class UserRolesResource:
    """GET/PUT /v1/users/{user_id}/roles - list and replace a user's roles."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        set_user_roles: SetUserRolesUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._set = set_user_roles

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return
        uid = parse_uuid(resp, user_id, "user")
        if not uid:
            return
        await ensure_granted(self._permission_checker, user.user_id, "roles:read")

        async with self._uow_factory() as uow:
            if not await uow.users.get_by_id(uid):
                raise NotFound("User", user_id)
            memberships = await uow.user_roles.list_by_user(uid)
            roles = {r.id: r for r in await uow.roles.get_many([m.role_id for m in memberships])}

        items = []
        for m in memberships:
            role = roles.get(m.role_id)
            if not role:
                continue
            items.append({
                "role_id": str(role.id),
                "name": role.name,
                "is_system": role.is_system,
                "assigned_at": m.created_at.isoformat(),
                "assigned_by": str(m.assigned_by) if m.assigned_by else None,
            })
        items.sort(key=lambda i: i["name"])

        resp.media = {"items": items}
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """Replace the user's roles with exactly role_ids."""
        user = require_user(req, resp)
        if not user:
            return
        uid = parse_uuid(resp, user_id, "user")
        if not uid:
            return

        body = await req.get_media()
        role_ids = parse_uuid_list(
            resp, body.get("role_ids") if isinstance(body, dict) else None, "role"
        )
        if role_ids is None:
            return

        change = await self._set.execute(user.user_id, uid, role_ids)
        resp.media = {
            "user_id": user_id,
            "role_ids": sorted(str(r) for r in change.target),
            "added": sorted(str(r) for r in change.added),
            "removed": sorted(str(r) for r in change.removed),
        }
        resp.status = falcon.HTTP_200


class UserRoleResource:
    """DELETE /v1/users/{user_id}/roles/{role_id} - revoke one role."""

    def __init__(self, remove_user_role: RemoveUserRoleUseCase) -> None:
        self._remove = remove_user_role

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
        role_id: str,
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return
        uid = parse_uuid(resp, user_id, "user")
        if not uid:
            return
        rid = parse_uuid(resp, role_id, "role")
        if not rid:
            return

        await self._remove.execute(user.user_id, uid, rid)
        resp.status = falcon.HTTP_204
