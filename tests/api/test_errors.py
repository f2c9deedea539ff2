"""Error handler tests."""

import falcon
from falcon.asgi import App
from falcon.testing import TestClient

from workshop_rbac.domain.exceptions import Conflict
from workshop_rbac.interfaces.api.errors import register_error_handlers


class _Raising:
    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    async def on_get(self, req, resp) -> None:
        raise self._exc


def _client(exc: Exception) -> TestClient:
    app = App()
    register_error_handlers(app)
    app.add_route("/boom", _Raising(exc))
    return TestClient(app)


def test_conflict_maps_to_409() -> None:
    r = _client(Conflict("Role changed concurrently")).simulate_get("/boom")
    assert r.status_code == 409
    assert r.json == {"error": "Role changed concurrently"}


def test_unexpected_error_is_generic_500(caplog) -> None:
    r = _client(RuntimeError("secret detail")).simulate_get("/boom")
    assert r.status_code == 500
    assert r.json == {"title": "500 Internal Server Error"}
    assert "secret detail" not in r.text
    assert "Unhandled error" in caplog.text


def test_http_errors_keep_falcon_handling() -> None:
    r = _client(falcon.HTTPNotFound()).simulate_get("/boom")
    assert r.status_code == 404
