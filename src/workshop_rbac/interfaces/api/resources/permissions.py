"""Permission catalog API resources."""

import falcon.asgi

from workshop_rbac.application.authorization import ensure_granted
from workshop_rbac.application.dto.permission_dto import PermissionCreateInput
from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.application.use_cases.catalog.create_permission import (
    CreatePermissionUseCase,
)
from workshop_rbac.application.use_cases.catalog.delete_permission import (
    DeletePermissionUseCase,
)
from workshop_rbac.domain.exceptions import NotFound
from workshop_rbac.interfaces.api.resources._common import parse_uuid, require_user
from workshop_rbac.interfaces.api.serializers import permission_to_dict


class PermissionsResource:
    """GET/POST /v1/permissions - list and create catalog permissions."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        create_permission: CreatePermissionUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._create = create_permission

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List catalog, optionally narrowed with ?resource=."""
        user = require_user(req, resp)
        if not user:
            return
        await ensure_granted(self._permission_checker, user.user_id, "permissions:read")

        resource = req.get_param("resource")
        async with self._uow_factory() as uow:
            if resource:
                perms = await uow.permissions.list_by_resource(resource)
            else:
                perms = await uow.permissions.list_all()

        resp.media = {"items": [permission_to_dict(p) for p in perms]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Add a permission to the catalog."""
        user = require_user(req, resp)
        if not user:
            return

        try:
            body = await req.get_media()
            data = PermissionCreateInput(
                resource=str(body["resource"]),
                action=str(body["action"]),
                description=body.get("description"),
                name=body.get("name"),
            )
        except (KeyError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return

        permission = await self._create.execute(user.user_id, data)
        resp.media = permission_to_dict(permission)
        resp.status = falcon.HTTP_201


class PermissionResource:
    """GET/DELETE /v1/permissions/{permission_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        delete_permission: DeletePermissionUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._delete = delete_permission

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        permission_id: str,
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return
        pid = parse_uuid(resp, permission_id, "permission")
        if not pid:
            return
        await ensure_granted(self._permission_checker, user.user_id, "permissions:read")

        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_id(pid)
        if not permission:
            raise NotFound("Permission", permission_id)

        resp.media = permission_to_dict(permission)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        permission_id: str,
    ) -> None:
        """Delete an unreferenced permission."""
        user = require_user(req, resp)
        if not user:
            return
        pid = parse_uuid(resp, permission_id, "permission")
        if not pid:
            return

        await self._delete.execute(user.user_id, pid)
        resp.status = falcon.HTTP_204
