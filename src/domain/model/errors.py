"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers and auth guards catch them and map to HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class PersistenceError(DomainError):
    """The document store rejected or failed a write."""


class InvalidCredentialsError(DomainError):
    """Email or password is wrong. Deliberately does not say which."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class InvalidTokenError(DomainError):
    """Access token is malformed, missing, or has a bad signature."""


class TokenExpiredError(InvalidTokenError):
    """Access token signature is valid but its expiry has passed."""


class TokenSigningError(DomainError):
    """Failed to mint a token (signing or random-byte generation)."""


class SessionNotFoundError(NotFoundError):
    """No session matches the presented user id and refresh token."""


class SessionExpiredError(DomainError):
    """Refresh token matched a session, but none of the matches is still valid."""
