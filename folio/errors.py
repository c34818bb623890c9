"""Error taxonomy shared by services, the auth gate and exception handlers."""

from __future__ import annotations

from typing import Any


class FolioError(Exception):
    """Base class for errors that map onto a JSON response."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        return {"success": False, "message": self.message}


class InvalidInput(FolioError):
    status_code = 400
    default_message = "Invalid input"


class InvalidId(FolioError):
    status_code = 400
    default_message = "Invalid ID format"


class InvalidEmail(FolioError):
    status_code = 400
    default_message = "Please provide a valid email address"


class ValidationError(FolioError):
    """Field-level rejection; carries one message per offending field."""

    status_code = 400
    default_message = "Validation error"

    def __init__(self, errors: list[str], message: str | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors)

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["errors"] = self.errors
        return payload


class InvalidCredentials(FolioError):
    status_code = 401
    default_message = "Invalid credentials"


class AuthError(FolioError):
    """Authorization gate failures render as a bare ``{message}`` body."""

    status_code = 403

    def to_payload(self) -> dict[str, Any]:
        return {"message": self.message}


class Unauthenticated(AuthError):
    default_message = "Access denied - No token provided"


class InvalidToken(AuthError):
    default_message = "Invalid token - Authentication failed"


class RegistrationDisabled(FolioError):
    status_code = 403
    default_message = "Registration is disabled"


class NotFound(FolioError):
    status_code = 404
    default_message = "Not found"


class Conflict(FolioError):
    status_code = 409
    default_message = "Resource already exists"


class InternalError(FolioError):
    status_code = 500
    default_message = "Server error"
