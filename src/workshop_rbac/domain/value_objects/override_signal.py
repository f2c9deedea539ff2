"""User-level override signal."""

from enum import StrEnum


class OverrideSignal(StrEnum):
    """Tri-state override for one (user, permission) pair."""

    GRANT = "grant"
    DENY = "deny"
    ABSENT = "absent"

    @classmethod
    def from_granted(cls, granted: bool | None) -> "OverrideSignal":
        """Map a stored ``granted`` flag (or no row at all) to a signal."""
        if granted is None:
            return cls.ABSENT
        return cls.GRANT if granted else cls.DENY

    @property
    def is_present(self) -> bool:
        return self is not OverrideSignal.ABSENT
