"""Assignment DTOs."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class AssignmentChange:
    """Result of a set replacement: the target set and the computed difference."""

    target: frozenset[UUID]
    added: frozenset[UUID] = field(default_factory=frozenset)
    removed: frozenset[UUID] = field(default_factory=frozenset)

    @classmethod
    def diff(cls, current: set[UUID], target: set[UUID]) -> "AssignmentChange":
        return cls(
            target=frozenset(target),
            added=frozenset(target - current),
            removed=frozenset(current - target),
        )

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)
