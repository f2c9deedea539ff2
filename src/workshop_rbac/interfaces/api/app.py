"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App
from psycopg_pool import AsyncConnectionPool

from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.application.use_cases.catalog.create_permission import (
    CreatePermissionUseCase,
)
from workshop_rbac.application.use_cases.catalog.delete_permission import (
    DeletePermissionUseCase,
)
from workshop_rbac.application.use_cases.role.create_role import CreateRoleUseCase
from workshop_rbac.application.use_cases.role.delete_role import DeleteRoleUseCase
from workshop_rbac.application.use_cases.role.remove_role_permission import (
    RemoveRolePermissionUseCase,
)
from workshop_rbac.application.use_cases.role.set_role_permissions import (
    SetRolePermissionsUseCase,
)
from workshop_rbac.application.use_cases.role.update_role import UpdateRoleUseCase
from workshop_rbac.application.use_cases.user_permission.clear_user_permission_override import (
    ClearUserPermissionOverrideUseCase,
)
from workshop_rbac.application.use_cases.user_permission.set_user_permission_override import (
    SetUserPermissionOverrideUseCase,
)
from workshop_rbac.application.use_cases.user_role.remove_user_role import RemoveUserRoleUseCase
from workshop_rbac.application.use_cases.user_role.set_user_roles import SetUserRolesUseCase
from workshop_rbac.interfaces.api.errors import register_error_handlers
from workshop_rbac.interfaces.api.resources.audit import AuditLogsResource
from workshop_rbac.interfaces.api.resources.health import HealthResource
from workshop_rbac.interfaces.api.resources.matrix import (
    MyPermissionsResource,
    UserCheckResource,
    UserMatrixResource,
)
from workshop_rbac.interfaces.api.resources.permissions import (
    PermissionResource,
    PermissionsResource,
)
from workshop_rbac.interfaces.api.resources.roles import (
    RolePermissionResource,
    RolePermissionsResource,
    RoleResource,
    RolesResource,
)
from workshop_rbac.interfaces.api.resources.user_permissions import (
    UserPermissionResource,
    UserPermissionsResource,
)
from workshop_rbac.interfaces.api.resources.user_roles import UserRoleResource, UserRolesResource


def create_app(
    unit_of_work_factory: type,
    permission_checker: PermissionChecker,
    *,
    pool: AsyncConnectionPool | None = None,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with use cases, routes and error handlers."""
    uow = unit_of_work_factory
    checker = permission_checker

    app = falcon.asgi.App(middleware=middleware or [])
    register_error_handlers(app)

    health = HealthResource(pool)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")

    app.add_route(
        "/v1/permissions",
        PermissionsResource(uow, checker, CreatePermissionUseCase(uow, checker)),
    )
    app.add_route(
        "/v1/permissions/{permission_id}",
        PermissionResource(uow, checker, DeletePermissionUseCase(uow, checker)),
    )

    app.add_route("/v1/roles", RolesResource(uow, checker, CreateRoleUseCase(uow, checker)))
    app.add_route(
        "/v1/roles/{role_id}",
        RoleResource(
            uow,
            checker,
            UpdateRoleUseCase(uow, checker),
            DeleteRoleUseCase(uow, checker),
        ),
    )
    app.add_route(
        "/v1/roles/{role_id}/permissions",
        RolePermissionsResource(SetRolePermissionsUseCase(uow, checker)),
    )
    app.add_route(
        "/v1/roles/{role_id}/permissions/{permission_id}",
        RolePermissionResource(RemoveRolePermissionUseCase(uow, checker)),
    )

    app.add_route(
        "/v1/users/{user_id}/roles",
        UserRolesResource(uow, checker, SetUserRolesUseCase(uow, checker)),
    )
    app.add_route(
        "/v1/users/{user_id}/roles/{role_id}",
        UserRoleResource(RemoveUserRoleUseCase(uow, checker)),
    )
    app.add_route(
        "/v1/users/{user_id}/permissions",
        UserPermissionsResource(uow, checker, SetUserPermissionOverrideUseCase(uow, checker)),
    )
    app.add_route(
        "/v1/users/{user_id}/permissions/{permission_id}",
        UserPermissionResource(ClearUserPermissionOverrideUseCase(uow, checker)),
    )
    app.add_route("/v1/users/{user_id}/matrix", UserMatrixResource(checker))
    app.add_route("/v1/users/{user_id}/check", UserCheckResource(checker))
    app.add_route("/v1/me/permissions", MyPermissionsResource(checker))

    audit = AuditLogsResource(uow, checker)
    app.add_route("/v1/audit/logs", audit)
    app.add_route("/v1/audit/users/{user_id}", audit, suffix="user")

    return app
