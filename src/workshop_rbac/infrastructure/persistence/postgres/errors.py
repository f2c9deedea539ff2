"""Map PostgreSQL integrity errors to domain conflicts."""

from collections.abc import Iterator
from contextlib import contextmanager

from psycopg import errors

from workshop_rbac.domain.exceptions import Conflict


@contextmanager
def integrity_as_conflict(what: str) -> Iterator[None]:
    """Raise Conflict when a concurrent writer got there first.

    Unique violations mean the row already exists; foreign key violations
    mean a referenced row was deleted between read and write.
    """
    try:
        yield
    except errors.UniqueViolation as e:
        raise Conflict(f"{what} already exists") from e
    except errors.ForeignKeyViolation as e:
        raise Conflict(f"{what} references a row that no longer exists") from e
