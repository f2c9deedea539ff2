"""Authorization gate for administrative operations."""

import logging
from uuid import UUID

from workshop_rbac.application.ports import PermissionChecker
from workshop_rbac.domain.exceptions import PermissionDenied

logger = logging.getLogger(__name__)


async def ensure_granted(
    permission_checker: PermissionChecker, actor_id: UUID, permission_name: str
) -> None:
    """Raise PermissionDenied unless actor holds permission_name."""
    if not await permission_checker.check(actor_id, permission_name):
        logger.info("Denied %s to user %s", permission_name, actor_id)
        raise PermissionDenied(f"User does not have {permission_name}")
