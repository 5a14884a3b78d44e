class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials or bearer tokens are invalid."""


class NotFoundError(DomainError):
    """Raised when a session or player is outside the coach's scope.

    Also used for records that exist but belong to another coach, so callers
    never learn about them.
    """


class ConflictError(DomainError):
    """Raised when a concurrent write to the same (player, session) pair collides."""
