"""Database connection module for Coursely."""

from coursely.core.database.engine import (
    create_engine,
    init_database,
    init_schema,
    ping,
    shutdown_database,
)
from coursely.core.database.seed import load_catalog, seed_catalog


__all__ = [
    "create_engine",
    "init_database",
    "init_schema",
    "load_catalog",
    "ping",
    "seed_catalog",
    "shutdown_database",
]
