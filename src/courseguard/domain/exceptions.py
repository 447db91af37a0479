"""Domain exceptions."""


class CourseGuardError(Exception):
    """Base exception for CourseGuard."""

    pass


class PermissionDenied(CourseGuardError):
    """User does not have permission for the requested action."""

    pass


class NotFound(CourseGuardError):
    """Requested resource was not found."""

    pass


class ValidationError(CourseGuardError):
    """Validation failed for input data."""

    pass


class StoreUnavailable(CourseGuardError):
    """Permission store could not be queried."""

    pass
