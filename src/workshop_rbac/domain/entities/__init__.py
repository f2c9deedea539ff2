"""Domain entities."""

from workshop_rbac.domain.entities.audit_log_entry import AuditLogEntry
from workshop_rbac.domain.entities.permission import Permission
from workshop_rbac.domain.entities.permission_matrix import MatrixEntry, PermissionMatrix
from workshop_rbac.domain.entities.role import Role
from workshop_rbac.domain.entities.role_permission import RolePermission
from workshop_rbac.domain.entities.user import User
from workshop_rbac.domain.entities.user_permission import UserPermission
from workshop_rbac.domain.entities.user_role import UserRole

__all__ = [
    "AuditLogEntry",
    "MatrixEntry",
    "Permission",
    "PermissionMatrix",
    "Role",
    "RolePermission",
    "User",
    "UserPermission",
    "UserRole",
]
