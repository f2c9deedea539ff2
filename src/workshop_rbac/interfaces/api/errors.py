"""Map domain exceptions to HTTP responses."""

import logging

import falcon
import falcon.asgi

from workshop_rbac.domain.exceptions import (
    Conflict,
    NotFound,
    PermissionDenied,
    ValidationError,
)

logger = logging.getLogger(__name__)


async def handle_permission_denied(req, resp, ex, params) -> None:
    # Generic on purpose: the body never says which rule failed.
    resp.status = falcon.HTTP_403
    resp.media = {"error": "Permission denied"}


async def handle_not_found(req, resp, ex: NotFound, params) -> None:
    logger.debug("%s %s: %s", req.method, req.path, ex)
    resp.status = falcon.HTTP_404
    resp.media = {"error": str(ex)}


async def handle_validation_error(req, resp, ex: ValidationError, params) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": str(ex)}


async def handle_conflict(req, resp, ex: Conflict, params) -> None:
    logger.info("%s %s conflicted: %s", req.method, req.path, ex)
    resp.status = falcon.HTTP_409
    resp.media = {"error": str(ex)}


async def handle_unexpected(req, resp, ex, params) -> None:
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Install handlers; Falcon picks the most specific one per exception."""
    app.add_error_handler(Exception, handle_unexpected)
    app.add_error_handler(PermissionDenied, handle_permission_denied)
    app.add_error_handler(NotFound, handle_not_found)
    app.add_error_handler(ValidationError, handle_validation_error)
    app.add_error_handler(Conflict, handle_conflict)
