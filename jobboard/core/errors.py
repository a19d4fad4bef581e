"""
Application error taxonomy.

Services raise these; the handlers registered in main.py turn them into
``{"error": <message>}`` responses with the matching HTTP status.
"""


class AppError(Exception):
    """Base class for errors that map directly to an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed or missing input."""
    status_code = 400


class AuthError(AppError):
    """Missing or invalid credentials / session."""
    status_code = 401


class AuthorizationError(AppError):
    """Authenticated, but the role is not allowed."""
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Duplicate unique key (reported as a plain 400 to clients)."""
    status_code = 400


class InternalError(AppError):
    status_code = 500
