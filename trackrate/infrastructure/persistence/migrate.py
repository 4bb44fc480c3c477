"""Alembic schema upgrades, run synchronously before the app serves requests."""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]

_SYNC_DRIVERS = {"+aiosqlite": "", "+asyncpg": "+psycopg2"}


def to_sync_url(database_url: str) -> str:
    """Swap the async driver for its sync counterpart and expand ``~`` in SQLite paths."""
    url = database_url
    for async_driver, sync_driver in _SYNC_DRIVERS.items():
        url = url.replace(async_driver, sync_driver)

    prefix, sep, path = url.partition(":///")
    if sep and prefix == "sqlite" and path.startswith("~"):
        url = f"sqlite:///{Path(path).expanduser()}"
    return url


def get_alembic_config(database_url: str) -> AlembicConfig:
    config = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", to_sync_url(database_url))
    return config


def sqlite_file(database_url: str) -> Path | None:
    """Database file behind a SQLite URL; None for in-memory or other backends."""
    prefix, sep, path = to_sync_url(database_url).partition(":///")
    if not sep or prefix != "sqlite" or not path or path == ":memory:":
        return None
    return Path(path)


def run_migrations(database_url: str) -> None:
    """Upgrade the schema to head, creating the SQLite directory if needed."""
    db_file = sqlite_file(database_url)
    if db_file is not None:
        db_file.parent.mkdir(parents=True, exist_ok=True)

    command.upgrade(get_alembic_config(database_url), "head")
    logger.info("Database schema is at head")
