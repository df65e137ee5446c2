# Core infrastructure
from coursely.core.context import (
    clear_context,
    get_context,
    get_correlation_id,
    get_request_id,
    get_user_id,
    set_correlation_id,
    set_request_id,
    set_user_id,
)
from coursely.core.errors import (
    AuthError,
    ConflictError,
    CourselyError,
    StorageError,
    ValidationError,
    handle_service_error,
)
from coursely.core.logging import configure_structlog, get_logger
from coursely.core.middleware import RequestContextMiddleware


__all__ = [
    "AuthError",
    "ConflictError",
    "CourselyError",
    "RequestContextMiddleware",
    "StorageError",
    "ValidationError",
    "clear_context",
    "configure_structlog",
    "get_context",
    "get_correlation_id",
    "get_logger",
    "get_request_id",
    "get_user_id",
    "handle_service_error",
    "set_correlation_id",
    "set_request_id",
    "set_user_id",
]
