"""Async relational database connection using SQLAlchemy's asyncio extension.

Provides:
- Engine (connection pool) creation from settings
- Foreign key enforcement on SQLite connections
- Schema initialization from the per-module DDL lists

The engine is created once in the application lifespan and handed to each
service constructor.
"""

from typing import Any

import structlog
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from coursely.auth.models import AUTH_TABLES_SQL
from coursely.config.settings import Settings, get_settings
from coursely.courses.models import COURSES_TABLES_SQL
from coursely.progress.models import PROGRESS_TABLES_SQL
from coursely.quizzes.models import QUIZ_TABLES_SQL


logger = structlog.get_logger(__name__)

# Creation order follows foreign key dependencies
SCHEMA_SQL: list[tuple[str, list[str]]] = [
    ("auth", AUTH_TABLES_SQL),
    ("courses", COURSES_TABLES_SQL),
    ("progress", PROGRESS_TABLES_SQL),
    ("quizzes", QUIZ_TABLES_SQL),
]


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(
    database_url: str | None = None,
    echo: bool | None = None,
) -> AsyncEngine:
    """Create the async engine.

    Args:
        database_url: SQLAlchemy async URL. Defaults to the configured one.
        echo: Log every SQL statement. Defaults to the configured flag.

    Returns:
        AsyncEngine with foreign keys enforced on SQLite.
    """
    settings = get_settings()
    url = database_url or settings.database_url

    engine = create_async_engine(
        url,
        echo=settings.database_echo if echo is None else echo,
        pool_pre_ping=True,
    )

    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


async def init_schema(engine: AsyncEngine) -> None:
    """Create all tables and indexes if they don't exist."""
    async with engine.begin() as conn:
        for module, statements in SCHEMA_SQL:
            for ddl in statements:
                await conn.execute(text(ddl))
            logger.info("tables_created", module=module)


async def init_database(settings: Settings | None = None) -> AsyncEngine:
    """Create the engine and the schema.

    Returns:
        Ready-to-use AsyncEngine.

    Raises:
        ConnectionError: If the database cannot be reached.
    """
    settings = settings or get_settings()
    engine = create_engine(settings.database_url, settings.database_echo)

    try:
        await init_schema(engine)
    except Exception as e:
        await engine.dispose()
        logger.error("database_connection_failed", error=str(e))
        raise ConnectionError(f"Failed to initialize database: {e}") from e

    logger.info("database_initialized", dialect=engine.dialect.name)
    return engine


async def shutdown_database(engine: AsyncEngine | None) -> None:
    """Dispose of the engine's connection pool."""
    if engine is not None:
        await engine.dispose()
        logger.info("database_engine_disposed")


async def ping(engine: AsyncEngine) -> bool:
    """Run ``SELECT 1``; False if the database is unreachable."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("database_ping_failed", error=str(e))
        return False
    return True
