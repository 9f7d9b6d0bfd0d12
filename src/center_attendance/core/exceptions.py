class DomainError(Exception):
    """Base exception for business rule violations."""

    error_code = "domain_error"
    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    error_code = "validation_error"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    error_code = "forbidden"
    http_status = 403


class NotFoundError(DomainError):
    """Raised when a session, call session or record is missing or not visible to the caller."""

    error_code = "not_found"
    http_status = 404


class OutOfRangeError(DomainError):
    """Raised when a coordinate lies outside the center's geofence."""

    error_code = "out_of_range"


class WindowClosedError(DomainError):
    """Raised when attendance is marked outside the allowed time window."""

    error_code = "window_closed"


class DuplicateAttendanceError(DomainError):
    """Raised when a qualifying attendance record already exists."""

    error_code = "duplicate"
    http_status = 409


class StorageUnavailableError(DomainError):
    """Raised on transient persistence failures. Safe to retry the whole request."""

    error_code = "storage_unavailable"
    http_status = 503
