"""Repository ports."""

from workshop_rbac.application.ports.repositories.audit_log_repository import (
    AuditLogRepository,
)
from workshop_rbac.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from workshop_rbac.application.ports.repositories.role_permission_repository import (
    RolePermissionRepository,
)
from workshop_rbac.application.ports.repositories.role_repository import RoleRepository
from workshop_rbac.application.ports.repositories.user_permission_repository import (
    UserPermissionRepository,
)
from workshop_rbac.application.ports.repositories.user_repository import UserRepository
from workshop_rbac.application.ports.repositories.user_role_repository import (
    UserRoleRepository,
)

__all__ = [
    "AuditLogRepository",
    "PermissionRepository",
    "RolePermissionRepository",
    "RoleRepository",
    "UserPermissionRepository",
    "UserRepository",
    "UserRoleRepository",
]
