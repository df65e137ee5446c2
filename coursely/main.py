"""Coursely API - Main Application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException

from coursely.auth.router import router as auth_router
from coursely.auth.service import AuthService
from coursely.config import get_settings
from coursely.core.context import get_request_id
from coursely.core.database import (
    init_database,
    load_catalog,
    seed_catalog,
    shutdown_database,
)
from coursely.core.logging import configure_structlog, get_logger
from coursely.core.middleware import RequestContextMiddleware
from coursely.courses.router import router as courses_router
from coursely.courses.service import CourseService
from coursely.health import router as health_router
from coursely.progress.router import router as progress_router
from coursely.progress.service import ProgressService
from coursely.quizzes.router import router as quizzes_router
from coursely.quizzes.service import QuizService


# Configure logging early (before creating logger)
settings = get_settings()
configure_structlog(settings, log_dir=Path(settings.log_dir))

logger = get_logger(__name__)


async def _seed_from_file(engine: AsyncEngine, path: str) -> None:
    """Seed the catalog; a bad catalog file is logged and leaves the API up."""
    try:
        await seed_catalog(engine, load_catalog(path))
    except (OSError, ValueError, KeyError, TypeError, SQLAlchemyError) as e:
        logger.error(
            "catalog_seed_failed",
            path=path,
            error_type=type(e).__name__,
            error=str(e),
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Creates the database engine and schema, optionally seeds the catalog,
    and builds one instance of each service on ``app.state``.
    """
    settings = get_settings()
    logger.info(
        "starting_application",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    app.state.engine = None
    try:
        engine = await init_database(settings)
        app.state.engine = engine

        app.state.auth_service = AuthService(engine)
        app.state.course_service = CourseService(engine)
        app.state.progress_service = ProgressService(engine)
        app.state.quiz_service = QuizService(engine)
        logger.info("services_initialized")
    except ConnectionError as e:
        logger.warning(
            "database_init_skipped",
            error=str(e),
            message="Running without database connection",
        )

    if app.state.engine is not None and settings.catalog_seed_path:
        await _seed_from_file(app.state.engine, settings.catalog_seed_path)

    yield

    logger.info("shutting_down_application")
    await shutdown_database(app.state.engine)


def _error_body(
    request: Request, status_code: int, message: str, **extra: object
) -> dict[str, object]:
    request_id = getattr(request.state, "request_id", None) or get_request_id()
    return {
        "error": True,
        "message": message,
        "status_code": status_code,
        "request_id": request_id,
        **extra,
    }


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    # debug stays off so Starlette never renders stack traces
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Online course platform API",
        debug=False,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )

    app.add_middleware(
        RequestContextMiddleware,
        log_requests=settings.log_requests,
        exclude_paths=settings.log_exclude_paths,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        max_age=settings.cors_max_age,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> ORJSONResponse:
        """Render HTTP errors; 5xx details are logged, never returned."""
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=request.url.path,
            method=request.method,
        )
        message = (
            str(exc.detail)
            if exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR
            else "Internal server error"
        )
        return ORJSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, exc.status_code, message),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        """Render malformed request bodies and parameters as 400."""
        logger.warning(
            "request_validation_error",
            errors=exc.errors(),
            path=request.url.path,
            method=request.method,
        )
        return ORJSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(
                request,
                status.HTTP_400_BAD_REQUEST,
                "Validation error",
                details=[
                    {
                        "field": ".".join(str(loc) for loc in err.get("loc", [])),
                        "message": err.get("msg", "Invalid value"),
                    }
                    for err in exc.errors()
                ],
            ),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> ORJSONResponse:
        """Log unhandled exceptions with their stack trace; answer a generic 500."""
        logger.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            error_message=str(exc),
            path=request.url.path,
            method=request.method,
        )
        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "An unexpected error occurred. Please try again later.",
            ),
        )

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(courses_router)
    app.include_router(progress_router)
    app.include_router(quizzes_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": f"{settings.app_name} API", "version": settings.app_version}

    return app


app = create_app()
