"""Domain exceptions."""


class WorkshopRBACError(Exception):
    """Base exception for workshop RBAC."""

    pass


class PermissionDenied(WorkshopRBACError):
    """User does not have permission for the requested action."""

    pass


class NotFound(WorkshopRBACError):
    """Requested user, role, permission or assignment was not found."""

    def __init__(self, entity: str, identifier: str) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class ValidationError(WorkshopRBACError):
    """Mutation would violate an invariant; rejected before any write."""

    pass


class Conflict(WorkshopRBACError):
    """Target changed shape between read and write; caller may re-read and retry."""

    pass
