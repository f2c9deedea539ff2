"""Domain value objects."""

from workshop_rbac.domain.value_objects.override_signal import OverrideSignal
from workshop_rbac.domain.value_objects.permission_name import PermissionName
from workshop_rbac.domain.value_objects.role_derived_signal import RoleDerivedSignal

__all__ = [
    "OverrideSignal",
    "PermissionName",
    "RoleDerivedSignal",
]
