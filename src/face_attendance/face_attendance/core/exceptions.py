class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced staff member or record does not exist."""


class AttendanceCompletedError(ValidationError):
    """Raised on a scan after the day's check-out has already been recorded."""


class RetryableError(DomainError):
    """Base for failures the caller may retry."""


class ConcurrencyConflict(RetryableError):
    """Raised when a concurrent scan won the race for the same staff/day."""


class TransientIOError(RetryableError):
    """Raised when the database is unreachable or an operation timed out."""
