class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or no session exists."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when an entity is missing or not visible to the caller."""


class PersistenceError(DomainError):
    """Raised when the datastore rejects a write (the whole unit of work is rolled back)."""
