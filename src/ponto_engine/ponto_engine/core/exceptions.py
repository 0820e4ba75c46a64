class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an employee, punch or adjustment does not exist."""


class InvalidTransitionError(ValidationError):
    """Raised when an adjustment that was already decided is processed again."""


class AfdDecodeError(ValidationError):
    """Raised when an uploaded AFD file cannot be decoded as text at all."""
