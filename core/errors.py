"""
Service Errors

Pure Python error taxonomy - NO Django imports.
Each error carries the HTTP status the error envelope middleware responds with.
"""


class ServiceError(Exception):
    """Base error for the service layer."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(ServiceError):
    """Raised when a required identity is absent or a referenced record does not exist."""

    status_code = 404


class InternalServerError(ServiceError):
    """Raised for any fault once a guarded store call has started."""

    status_code = 500


class BadRequestError(ServiceError):
    """Raised when a request payload fails validation."""

    status_code = 400

    def __init__(self, message: str, errors: dict | None = None):
        super().__init__(message)
        self.errors = errors or {}


class UnauthorizedError(ServiceError):
    """Raised when credentials or tokens are missing, invalid or expired."""

    status_code = 401


class ConflictError(ServiceError):
    """Raised when a resource already exists (e.g. duplicate email)."""

    status_code = 409
