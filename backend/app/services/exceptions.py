# app/services/exceptions.py
"""
Error taxonomy raised by the services.
Each class carries the HTTP status it is rendered with by the app-level handler.
"""


class AppError(Exception):
    """Base class; ``message`` is returned to the client as-is."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or malformed required fields, or storage rejected the write"""
    status_code = 400


class NotFoundError(AppError):
    """Referenced id has no record, or a listing came back empty"""
    status_code = 400


class ConflictError(AppError):
    """Case/accent-insensitive duplicate of a unique field"""
    status_code = 409


class TooManyAttemptsError(AppError):
    """Login attempt budget exhausted for the caller"""
    status_code = 429
