"""Audit trail for administrative permission changes."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from workshop_rbac.application.ports import UnitOfWork
from workshop_rbac.domain.entities import AuditLogEntry


class AuditAction(StrEnum):
    """Audited administrative actions."""

    CREATE_PERMISSION = "create_permission"
    DELETE_PERMISSION = "delete_permission"
    CREATE_ROLE = "create_role"
    UPDATE_ROLE = "update_role"
    DELETE_ROLE = "delete_role"
    SET_ROLE_PERMISSIONS = "set_role_permissions"
    REMOVE_ROLE_PERMISSION = "remove_role_permission"
    SET_USER_ROLES = "set_user_roles"
    REMOVE_USER_ROLE = "remove_user_role"
    GRANT_USER_PERMISSION = "grant_user_permission"
    DENY_USER_PERMISSION = "deny_user_permission"
    CLEAR_USER_PERMISSION = "clear_user_permission"


async def record_change(
    uow: UnitOfWork,
    action: AuditAction,
    resource_type: str,
    *,
    resource_id: UUID | str | None = None,
    user_id: UUID | None = None,
    performed_by: UUID | None = None,
    changes: dict[str, Any] | None = None,
) -> AuditLogEntry:
    """Append an audit entry inside the caller's unit of work."""
    entry = AuditLogEntry(
        id=uuid4(),
        action=action.value,
        resource_type=resource_type,
        resource_id=str(resource_id) if resource_id is not None else None,
        user_id=user_id,
        performed_by=performed_by,
        changes=changes or {},
        created_at=datetime.now(UTC),
    )
    return await uow.audit_logs.create(entry)


def id_list(ids) -> list[str]:
    """Sorted string ids for JSON audit payloads."""
    return sorted(str(i) for i in ids)
