class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation_error"


class DecodeError(DomainError):
    """Raised when a device payload cannot be decoded."""

    kind = "decode_error"


class NotFoundError(DomainError):
    """Raised when an employee, work-day, record or punch does not exist."""

    kind = "not_found"


class RepositoryError(DomainError):
    """Raised when the backing store fails."""

    kind = "repository_error"


class DeadlineExceededError(DomainError):
    """Raised when a long-running query outlives the caller's deadline."""

    kind = "deadline_exceeded"
