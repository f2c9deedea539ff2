"""Request helpers shared by resources."""

from uuid import UUID

import falcon
import falcon.asgi

from workshop_rbac.interfaces.api.middleware.auth import RequestUser


def require_user(req: falcon.asgi.Request, resp: falcon.asgi.Response) -> RequestUser | None:
    """Return the authenticated user, or answer 401 and return None."""
    user = getattr(req.context, "user", None)
    if not user:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized"}
        return None
    return user


def parse_uuid(resp: falcon.asgi.Response, value: str, what: str) -> UUID | None:
    """Parse a path/body id, or answer 400 and return None."""
    try:
        return UUID(str(value))
    except ValueError:
        resp.status = falcon.HTTP_400
        resp.media = {"error": f"Invalid {what} ID"}
        return None


def parse_uuid_list(resp: falcon.asgi.Response, values, what: str) -> list[UUID] | None:
    """Parse a JSON array of ids, or answer 400 and return None."""
    if not isinstance(values, list):
        resp.status = falcon.HTTP_400
        resp.media = {"error": f"{what}_ids must be a list"}
        return None
    try:
        return [UUID(str(v)) for v in values]
    except ValueError:
        resp.status = falcon.HTTP_400
        resp.media = {"error": f"Invalid {what} ID"}
        return None
