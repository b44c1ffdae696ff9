class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when credentials or bearer tokens are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a looked-up record does not exist."""


class UpstreamError(DomainError):
    """Raised when a dependent external service fails."""


class PersistenceError(DomainError):
    """Raised when a storage write or read fails after validation passed."""
