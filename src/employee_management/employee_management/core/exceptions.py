class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateEmailError(ValidationError):
    """Raised when an email is already used by another account."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when an account lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class PersistenceError(DomainError):
    """Raised when the storage backend fails to write a partition."""
