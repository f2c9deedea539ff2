"""Fixtures for API tests."""

from uuid import UUID

import pytest
from falcon.testing import TestClient

from workshop_rbac.infrastructure.permission.permission_resolver import PermissionResolver
from workshop_rbac.interfaces.api.app import create_app
from workshop_rbac.interfaces.api.middleware.auth import RequestUser

ADMIN_PERMISSIONS = (
    "permissions:read",
    "permissions:create",
    "permissions:delete",
    "permissions:grant",
    "permissions:revoke",
    "roles:read",
    "roles:create",
    "roles:update",
    "roles:delete",
    "roles:grant",
    "roles:revoke",
)


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing; user_id None means anonymous."""

    def __init__(self) -> None:
        self.user_id: UUID | None = None

    async def process_request(self, req, resp):
        req.context.user = RequestUser(user_id=self.user_id) if self.user_id else None


@pytest.fixture
def admin(fake_uow):
    """User holding a system role linked to every administrative permission."""
    for name in ADMIN_PERMISSIONS:
        fake_uow.add_permission(name)
    role = fake_uow.add_role("admin", *ADMIN_PERMISSIONS, is_system=True)
    return fake_uow.add_user(role)


@pytest.fixture
def auth(admin) -> AuthBypassMiddleware:
    bypass = AuthBypassMiddleware()
    bypass.user_id = admin.id
    return bypass


@pytest.fixture
def app(uow_factory, auth):
    """Falcon ASGI app wired to in-memory stores and the real resolver."""
    return create_app(uow_factory, PermissionResolver(uow_factory), middleware=[auth])


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
