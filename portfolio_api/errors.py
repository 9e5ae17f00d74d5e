from __future__ import annotations


class ApiError(RuntimeError):
    """Base for errors that map onto an HTTP status code."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    status_code = 400


class AuthError(ApiError):
    # Messages stay uniform so callers cannot tell which credential was wrong.
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


class InternalError(ApiError):
    status_code = 500


class RepositoryError(InternalError):
    """Storage invariant violated (e.g. a row vanished right after insert)."""
