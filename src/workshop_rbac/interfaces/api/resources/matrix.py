"""Effective permission API resources."""

import falcon.asgi

from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.interfaces.api.resources._common import parse_uuid, require_user
from workshop_rbac.interfaces.api.serializers import matrix_to_dict


class UserMatrixResource:
    """GET /v1/users/{user_id}/matrix - effective matrix with provenance."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

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

        matrix = await self._permission_checker.build_effective_matrix(uid)
        resp.media = matrix_to_dict(matrix)
        resp.status = falcon.HTTP_200


class UserCheckResource:
    """GET /v1/users/{user_id}/check?permission=resource:action."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return
        uid = parse_uuid(resp, user_id, "user")
        if not uid:
            return
        permission = req.get_param("permission")
        if not permission:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Missing required parameter: permission"}
            return
        await ensure_granted(self._permission_checker, user.user_id, "permissions:read")

        granted = await self._permission_checker.is_granted(uid, permission)
        resp.media = {"user_id": user_id, "permission": permission, "granted": granted}
        resp.status = falcon.HTTP_200


class MyPermissionsResource:
    """GET /v1/me/permissions - the caller's own effective permissions."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req, resp)
        if not user:
            return

        matrix = await self._permission_checker.build_effective_matrix(user.user_id)
        data = matrix_to_dict(matrix)
        data["granted"] = matrix.granted_names()
        resp.media = data
        resp.status = falcon.HTTP_200
