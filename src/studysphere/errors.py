from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found or is owned by another user."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when there is no valid session or credentials are wrong.

    The message never says why a session was rejected: missing, expired and
    tampered tokens all look the same to the caller.
    """

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""
