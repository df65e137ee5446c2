"""Load a course catalog into the database.

Creates the schema if needed, then inserts courses, lessons, questions and
options from a JSON file. Does nothing when courses already exist.

Usage:
    python -m scripts.seed_catalog [catalog.json]

Without an argument the ``CATALOG_SEED_PATH`` setting is used.
"""

import asyncio
import sys

import structlog

from coursely.config.settings import get_settings
from coursely.core.database import (
    init_database,
    load_catalog,
    seed_catalog,
    shutdown_database,
)


logger = structlog.get_logger(__name__)


async def run_seed(path: str) -> dict[str, int]:
    """Seed the configured database from ``path``."""
    settings = get_settings()
    logger.info("catalog_seed_starting", path=path, database_url=settings.database_url)

    engine = await init_database(settings)
    try:
        return await seed_catalog(engine, load_catalog(path))
    finally:
        await shutdown_database(engine)


def main() -> None:
    path = sys.argv[1] if len(sys.argv) > 1 else get_settings().catalog_seed_path
    if not path:
        sys.exit("usage: python -m scripts.seed_catalog <catalog.json>")

    counts = asyncio.run(run_seed(path))
    logger.info("catalog_seed_completed", **counts)


if __name__ == "__main__":
    main()
