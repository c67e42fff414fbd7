"""
Application error taxonomy.

Every error the API reports to a caller is an ``AppError`` subclass carrying
its HTTP status, a short ``error`` label and a human-readable ``message``.
The exception handlers in ``api.middleware`` turn these into the
``{"success": false, "error", "message"?, "details"?}`` envelope.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class AppError(Exception):
    status_code: int = 500
    error: str = "Server Error"
    message: Optional[str] = None

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        if message is not None:
            self.message = message
        self.details = details
        super().__init__(self.message or self.error)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "error": self.error}
        if self.message:
            body["message"] = self.message
        if self.details:
            body["details"] = self.details
        return body


class ValidationFailed(AppError):
    status_code = 400
    error = "Validation failed"


class DuplicateIdentity(AppError):
    status_code = 400
    error = "User already exists"


class InvalidCredentials(AppError):
    """Login failure. Unknown email and wrong password share this exact body."""

    status_code = 401
    error = "Invalid credentials"
    message = "Email or password is incorrect"


class Unauthorized(AppError):
    status_code = 401
    error = "Unauthorized"


class MissingCredential(Unauthorized):
    message = "No token provided. Please include a Bearer token in the Authorization header."


class InvalidCredential(Unauthorized):
    message = "Invalid or expired token"


class StaleCredential(Unauthorized):
    message = "User no longer exists"


class NotFound(AppError):
    status_code = 404
    error = "Task not found"
    message = "Task does not exist or you do not have permission to access it"


class MalformedId(AppError):
    status_code = 400
    error = "Invalid task ID"
    message = "The provided task ID is not valid"


class Internal(AppError):
    status_code = 500
    error = "Server Error"
