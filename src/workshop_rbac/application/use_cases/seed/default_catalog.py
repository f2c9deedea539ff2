"""Baseline permission catalog and roles of the workshop."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionSeed:
    resource: str
    action: str
    description: str

    @property
    def name(self) -> str:
        return f"{self.resource}:{self.action}"


@dataclass(frozen=True)
class RoleSeed:
    name: str
    description: str
    permissions: tuple[str, ...]
    is_system: bool = True


def _crud(resource: str, label: str, *extra: tuple[str, str]) -> list[PermissionSeed]:
    seeds = [
        PermissionSeed(resource, "create", f"Create {label}"),
        PermissionSeed(resource, "read", f"View {label}"),
        PermissionSeed(resource, "update", f"Update {label}"),
        PermissionSeed(resource, "delete", f"Delete {label}"),
    ]
    seeds.extend(PermissionSeed(resource, action, desc) for action, desc in extra)
    return seeds


DEFAULT_PERMISSIONS: tuple[PermissionSeed, ...] = (
    *_crud(
        "service_orders",
        "service orders",
        ("assign", "Assign technicians to service orders"),
        ("approve", "Approve service orders"),
    ),
    *_crud("customers", "customers"),
    *_crud("bikes", "bikes"),
    *_crud("parts", "parts", ("adjust", "Adjust part inventory")),
    PermissionSeed("payments", "create", "Create payments"),
    PermissionSeed("payments", "read", "View payments"),
    PermissionSeed("payments", "update", "Update payments"),
    PermissionSeed("payments", "void", "Void payments"),
    PermissionSeed("payments", "refund", "Refund payments"),
    PermissionSeed("pos_sessions", "create", "Open POS sessions"),
    PermissionSeed("pos_sessions", "read", "View POS sessions"),
    PermissionSeed("pos_sessions", "update", "Close POS sessions"),
    PermissionSeed("pos_transactions", "create", "Create POS transactions"),
    PermissionSeed("pos_transactions", "read", "View POS transactions"),
    PermissionSeed("pos_transactions", "void", "Void POS transactions"),
    *_crud("sales_orders", "sales orders"),
    PermissionSeed("reports", "read", "View reports"),
    PermissionSeed("reports", "export", "Export reports"),
    *_crud("users", "users"),
    PermissionSeed("permissions", "read", "View permissions and effective access"),
    PermissionSeed("permissions", "create", "Add permissions to the catalog"),
    PermissionSeed("permissions", "delete", "Remove unused permissions from the catalog"),
    PermissionSeed("permissions", "grant", "Grant permissions to roles and users"),
    PermissionSeed("permissions", "revoke", "Revoke permissions from roles and users"),
    *_crud("roles", "roles"),
    PermissionSeed("roles", "grant", "Grant roles to users"),
    PermissionSeed("roles", "revoke", "Revoke roles from users"),
)


DEFAULT_ROLES: tuple[RoleSeed, ...] = (
    RoleSeed(
        name="sales",
        description="Sales staff - creates service orders, registers customers and schedules appointments",
        permissions=(
            "service_orders:create",
            "service_orders:read",
            "service_orders:update",
            "customers:create",
            "customers:read",
            "customers:update",
            "bikes:create",
            "bikes:read",
            "bikes:update",
            "parts:read",
        ),
    ),
    RoleSeed(
        name="technician",
        description="Technician - views assigned work, updates progress and records parts usage",
        permissions=(
            "service_orders:read",
            "service_orders:update",
            "customers:read",
            "bikes:read",
            "parts:read",
            "parts:update",
        ),
    ),
    RoleSeed(
        name="manager",
        description="Manager - monitors operations, assigns technicians, approves work and views analytics",
        permissions=(
            "service_orders:create",
            "service_orders:read",
            "service_orders:update",
            "service_orders:delete",
            "service_orders:assign",
            "service_orders:approve",
            "customers:create",
            "customers:read",
            "customers:update",
            "customers:delete",
            "bikes:create",
            "bikes:read",
            "bikes:update",
            "bikes:delete",
            "parts:create",
            "parts:read",
            "parts:update",
            "parts:delete",
            "parts:adjust",
            "payments:read",
            "pos_sessions:read",
            "pos_transactions:read",
            "sales_orders:read",
            "reports:read",
            "reports:export",
            "users:read",
            "permissions:read",
            "roles:read",
        ),
    ),
    RoleSeed(
        name="finance",
        description="Finance - processes payments, generates invoices and tracks receivables",
        permissions=(
            "service_orders:read",
            "customers:read",
            "bikes:read",
            "payments:create",
            "payments:read",
            "payments:update",
            "payments:void",
            "payments:refund",
            "pos_sessions:create",
            "pos_sessions:read",
            "pos_sessions:update",
            "pos_transactions:create",
            "pos_transactions:read",
            "pos_transactions:void",
            "sales_orders:create",
            "sales_orders:read",
            "sales_orders:update",
            "reports:read",
            "reports:export",
        ),
    ),
    RoleSeed(
        name="admin",
        description="Administrator - full system access",
        permissions=tuple(p.name for p in DEFAULT_PERMISSIONS),
    ),
)
