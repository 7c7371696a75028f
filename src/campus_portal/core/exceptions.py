class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or no session exists."""

    status_code = 401


class ForbiddenError(DomainError):
    """Raised when an action is not allowed on the target record."""

    status_code = 403


class AuthorizationError(ForbiddenError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Raised when a record clashes with existing data."""

    status_code = 409


class InvalidTransitionError(ConflictError):
    """Raised when a leave decision is made out of order."""


class PersistenceError(DomainError):
    """Raised when the data store fails unexpectedly.

    The message is for server logs only.
    """

    status_code = 500
