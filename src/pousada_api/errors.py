"""Application error taxonomy rendered by the API layer."""

from datetime import date


class AppError(Exception):
    """Base error carrying an HTTP status and a client-safe message."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = 400
    message = "Invalid request"


class InvalidRange(ValidationError):
    """A date range whose start is not strictly before its end."""

    message = "Start date must be before end date"


class Unauthenticated(AppError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    message = "Not authenticated"


class Forbidden(AppError):
    """Authenticated caller lacks the required role."""

    status_code = 403
    message = "Insufficient permissions"


class NotFound(AppError):
    """Unknown resource id."""

    status_code = 404
    message = "Not found"


class Conflict(AppError):
    """The request collides with existing state."""

    status_code = 409
    message = "Conflict"


class DuplicateAccount(Conflict):
    """An account with the same email already exists."""

    message = "An account with this email already exists"


class DateConflict(Conflict):
    """A booking overlaps an existing booking."""

    def __init__(self, colliding_date: date | None = None) -> None:
        self.colliding_date = colliding_date
        if colliding_date is None:
            super().__init__("The selected dates are already booked")
        else:
            super().__init__(f"Date {colliding_date.isoformat()} is already booked")


class StorageFailure(AppError):
    """An external store was unreachable or returned an error."""

    status_code = 500
    message = "Storage unavailable"
