"""User permission override API resources."""

import falcon.asgi

from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.application.use_cases.user_permission.clear_user_permission_override import (
    ClearUserPermissionOverrideUseCase,
)
from workshop_rbac.application.use_cases.user_permission.set_user_permission_override import (
    SetUserPermissionOverrideUseCase,
)
from workshop_rbac.domain.exceptions import NotFound
from workshop_rbac.interfaces.api.resources._common import (
    parse_uuid,
    parse_uuid_list,
    require_user,
)
from workshop_rbac.interfaces.api.serializers import override_to_dict


class UserPermissionsResource:
    """GET/POST /v1/users/{user_id}/permissions - list and set overrides."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        set_override: SetUserPermissionOverrideUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._set = set_override

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return
        uid = parse_uuid(resp, user_id, "user")
        if not uid:
            return
        await ensure_granted(self._permission_checker, user.user_id, "permissions:read")

        async with self._uow_factory() as uow:
            if not await uow.users.get_by_id(uid):
                raise NotFound("User", user_id)
            overrides = await uow.user_permissions.list_by_user(uid)
            perms = {
                p.id: p
                for p in await uow.permissions.get_many([o.permission_id for o in overrides])
            }

        resp.media = {
            "items": [override_to_dict(o, perms.get(o.permission_id)) for o in overrides]
        }
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """Grant (default) or deny permission_ids for the user."""
        user = require_user(req, resp)
        if not user:
            return
        uid = parse_uuid(resp, user_id, "user")
        if not uid:
            return

        body = await req.get_media()
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Expected a JSON object"}
            return
        permission_ids = parse_uuid_list(resp, body.get("permission_ids"), "permission")
        if permission_ids is None:
            return
        granted = body.get("granted", True)
        if not isinstance(granted, bool):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "granted must be a boolean"}
            return

        overrides = await self._set.execute_many(user.user_id, uid, permission_ids, granted)
        async with self._uow_factory() as uow:
            perms = {p.id: p for p in await uow.permissions.get_many(permission_ids)}
        resp.media = {
            "items": [override_to_dict(o, perms.get(o.permission_id)) for o in overrides]
        }
        resp.status = falcon.HTTP_200


class UserPermissionResource:
    """DELETE /v1/users/{user_id}/permissions/{permission_id} - clear override."""

    def __init__(self, clear_override: ClearUserPermissionOverrideUseCase) -> None:
        self._clear = clear_override

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
        permission_id: str,
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return
        uid = parse_uuid(resp, user_id, "user")
        if not uid:
            return
        pid = parse_uuid(resp, permission_id, "permission")
        if not pid:
            return

        await self._clear.execute(user.user_id, uid, pid)
        resp.status = falcon.HTTP_204
