"""Permission audit log API resources."""

import falcon.asgi

from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.interfaces.api.resources._common import parse_uuid, require_user
from workshop_rbac.interfaces.api.serializers import audit_entry_to_dict

MAX_PAGE_SIZE = 500


class AuditLogsResource:
    """GET /v1/audit/logs and /v1/audit/users/{user_id}, newest first."""

    def __init__(
        self, unit_of_work_factory: type, permission_checker: PermissionChecker
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    def _page(self, req: falcon.asgi.Request) -> tuple[int, int]:
        limit = req.get_param_as_int("limit") or 100
        offset = req.get_param_as_int("offset") or 0
        return min(max(limit, 1), MAX_PAGE_SIZE), max(offset, 0)

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req, resp)
        if not user:
            return
        await ensure_granted(self._permission_checker, user.user_id, "permissions:read")

        limit, offset = self._page(req)
        async with self._uow_factory() as uow:
            entries = await uow.audit_logs.list(limit=limit, offset=offset)

        resp.media = {
            "items": [audit_entry_to_dict(e) for e in entries],
            "limit": limit,
            "offset": offset,
        }
        resp.status = falcon.HTTP_200

    async def on_get_user(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return
        uid = parse_uuid(resp, user_id, "user")
        if not uid:
            return
        await ensure_granted(self._permission_checker, user.user_id, "permissions:read")

        limit, offset = self._page(req)
        async with self._uow_factory() as uow:
            entries = await uow.audit_logs.list(user_id=uid, limit=limit, offset=offset)

        resp.media = {
            "items": [audit_entry_to_dict(e) for e in entries],
            "limit": limit,
            "offset": offset,
        }
        resp.status = falcon.HTTP_200
