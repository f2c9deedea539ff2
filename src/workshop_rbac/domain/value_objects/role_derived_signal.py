"""Role-derived signal."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RoleDerivedSignal:
    """Names of the held roles that grant a permission.

    The permission is role-granted when at least one held role grants it.
    """

    role_names: tuple[str, ...] = ()

    @property
    def granted(self) -> bool:
        return bool(self.role_names)
