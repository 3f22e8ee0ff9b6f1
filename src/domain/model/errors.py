"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class InvalidCredentialsError(DomainError):
    """Email/password pair does not match a user.

    Raised for both unknown email and wrong password so callers
    cannot tell which one was wrong.
    """


class AlreadyLikedError(DuplicateError):
    """User already liked this project."""

    def __init__(self, user_id: str, project_id: str):
        self.user_id = user_id
        self.project_id = project_id
        super().__init__("Like already exists")


class LikeNotFoundError(NotFoundError):
    """No like exists for this (user, project) pair."""

    def __init__(self, user_id: str, project_id: str):
        self.user_id = user_id
        self.project_id = project_id
        super().__init__("Like not found")


class TokenError(DomainError):
    """Base class for rejected bearer tokens."""


class TokenExpiredError(TokenError):
    """Token signature is valid but its expiry is in the past."""


class InvalidTokenError(TokenError):
    """Token is malformed, tampered with, or lacks required claims."""


class StoreUnavailableError(DomainError):
    """The external record store failed, timed out, or returned garbage."""
