"""Exceptions raised by the conference portal client."""

from typing import Any, Optional


class PortalError(Exception):
    """Base class for every portal error."""


class FormValidationError(PortalError):
    """A form failed a client-side check before anything was sent."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class ApiError(PortalError):
    """The backend answered with an error, or with success set to false."""

    default_message = "Request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        self.message = message or self.default_message
        self.status_code = status_code
        self.payload = payload
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class ValidationFailedError(ApiError):
    default_message = "The server rejected the submitted data"


class AuthenticationError(ApiError):
    default_message = "Session expired. Please login again."


class EmailNotVerifiedError(AuthenticationError):
    default_message = "Please verify your email before logging in"

    def __init__(self, email: Optional[str] = None, **kwargs):
        self.email = email
        super().__init__(**kwargs)


class AuthorizationError(ApiError):
    default_message = "You do not have permission to perform this action"


class NotFoundError(ApiError):
    default_message = "Resource not found"


class ServerError(ApiError):
    default_message = "Server error. Please try again later."


class ConnectionFailedError(ApiError):
    default_message = "Could not reach the conference server"


def error_for_status(status_code: int) -> type:
    """Map an HTTP status code to the matching ApiError subclass."""
    if status_code in (400, 422):
        return ValidationFailedError
    if status_code == 401:
        return AuthenticationError
    if status_code == 403:
        return AuthorizationError
    if status_code == 404:
        return NotFoundError
    if status_code >= 500:
        return ServerError
    return ApiError


def user_message(error: Exception) -> str:
    """Text shown to a person when an operation fails."""
    if isinstance(error, EmailNotVerifiedError):
        return f"Email not verified: {error.message}. Check your inbox for the verification link."
    if isinstance(error, AuthenticationError):
        return f"Authentication failed: {error.message}"
    if isinstance(error, AuthorizationError):
        return f"Permission denied: {error.message}"
    if isinstance(error, FormValidationError):
        return f"Invalid {error.field}: {error.message}"
    if isinstance(error, ValidationFailedError):
        return f"Invalid input: {error.message}"
    if isinstance(error, ConnectionFailedError):
        return f"Connection failed: {error.message}"
    return f"Error: {error}"
