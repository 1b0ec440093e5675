class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a requested record does not exist."""


class InvalidStatusTransition(DomainError):
    """Raised when a salary record cannot move to the requested status."""


class PersistenceError(DomainError):
    """Raised when a repository write does not take effect."""
