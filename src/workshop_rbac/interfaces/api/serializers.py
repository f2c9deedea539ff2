"""JSON shapes of API responses."""

from workshop_rbac.domain.entities import (
    AuditLogEntry,
    Permission,
    PermissionMatrix,
    Role,
    UserPermission,
)


def permission_to_dict(p: Permission) -> dict:
    return {
        "id": str(p.id),
        "name": p.name,
        "resource": p.resource,
        "action": p.action,
        "description": p.description,
    }


def role_to_dict(role: Role, **extra) -> dict:
    data = {
        "id": str(role.id),
        "name": role.name,
        "description": role.description,
        "is_system": role.is_system,
        "created_at": role.created_at.isoformat(),
        "updated_at": role.updated_at.isoformat(),
    }
    data.update(extra)
    return data


def override_to_dict(o: UserPermission, permission: Permission | None) -> dict:
    return {
        "permission_id": str(o.permission_id),
        "permission": permission.name if permission else None,
        "granted": o.granted,
        "assigned_at": o.assigned_at.isoformat(),
        "assigned_by": str(o.assigned_by) if o.assigned_by else None,
    }


def matrix_to_dict(matrix: PermissionMatrix) -> dict:
    """Entries plus sorted resource/action axes for the admin grid."""
    return {
        "user_id": str(matrix.user_id),
        "resources": sorted({e.permission.resource for e in matrix.entries}),
        "actions": sorted({e.permission.action for e in matrix.entries}),
        "grid": {
            resource: {action: e.effective_status for action, e in actions.items()}
            for resource, actions in matrix.by_resource().items()
        },
        "entries": [
            {
                "permission": permission_to_dict(e.permission),
                "effective_status": e.effective_status,
                "granted_by_roles": list(e.granted_by_roles),
                "override": e.override.value if e.override.is_present else None,
            }
            for e in matrix.entries
        ],
    }


def audit_entry_to_dict(e: AuditLogEntry) -> dict:
    return {
        "id": str(e.id),
        "action": e.action,
        "resource_type": e.resource_type,
        "resource_id": e.resource_id,
        "user_id": str(e.user_id) if e.user_id else None,
        "performed_by": str(e.performed_by) if e.performed_by else None,
        "changes": e.changes,
        "created_at": e.created_at.isoformat(),
    }
