"""Error taxonomy shared by all services.

Services raise these errors; routers turn them into HTTP responses with
``handle_service_error``. Store exceptions are always wrapped in
``StorageError`` before they leave a service.
"""

from fastapi import HTTPException, status


class CourselyError(Exception):
    """Base service error."""

    def __init__(self, message: str, code: str = "coursely_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(CourselyError):
    """Missing or malformed input."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, "validation_error")


class ConflictError(CourselyError):
    """Uniqueness violation."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, "conflict")


class AuthError(CourselyError):
    """Login failure. The message never says which check failed."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, "auth_error")


class StorageError(CourselyError):
    """Any store-level failure."""

    def __init__(self, message: str = "Database error"):
        super().__init__(message, "storage_error")


STATUS_MAP = {
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "conflict": status.HTTP_409_CONFLICT,
    "auth_error": status.HTTP_401_UNAUTHORIZED,
    "storage_error": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def handle_service_error(error: CourselyError) -> HTTPException:
    """Convert a service error to an HTTPException.

    Unknown codes map to 500.
    """
    return HTTPException(
        status_code=STATUS_MAP.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=error.message,
    )


def require_fields(message: str | None = None, /, **fields: object) -> None:
    """Raise ValidationError if any of ``fields`` is absent.

    ``None`` and blank strings count as absent; ``False`` and ``0`` do not.
    Without an explicit ``message`` the error names the absent fields.
    """
    missing = [
        name
        for name, value in fields.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationError(
            message or f"Missing required fields: {', '.join(missing)}"
        )
