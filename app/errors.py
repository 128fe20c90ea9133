# app/errors.py
"""
Typed request-level failures.

Route handlers and dependencies raise these; the handlers registered in
``app.error_handlers`` turn them into the JSON error envelope.
"""


class AppError(Exception):
    """Base class: a message plus the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404


class ValidationError(AppError):
    status_code = 400


class AuthenticationError(AppError):
    status_code = 401


class InternalServerError(AppError):
    """Raised in place of an unexpected exception, which is kept as ``__cause__``."""

    status_code = 500

    def __init__(self, message: str = "Internal Server Error") -> None:
        super().__init__(message)
