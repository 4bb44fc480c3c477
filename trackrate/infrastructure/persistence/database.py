"""Async engine and session factory.

SQLite (aiosqlite) serves local runs and tests; PostgreSQL (asyncpg) serves
deployments. Both must enforce the foreign keys and unique constraints that
the rating and engagement invariants rely on.
"""

from pathlib import Path
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from trackrate.config import Config


def _is_memory(url: URL) -> bool:
    return url.database in (None, "", ":memory:")


def _resolve_sqlite(url: URL) -> URL:
    if _is_memory(url):
        return url
    path = Path(url.database).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    return url.set(database=str(path))


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    # SQLite ships with FK enforcement off, per connection.
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_engine(config: Config) -> AsyncEngine:
    url = make_url(config.database.url)
    kwargs: dict[str, Any] = {"echo": config.database.echo}

    if url.get_backend_name() != "sqlite":
        kwargs.update(pool_pre_ping=True, pool_size=5, max_overflow=10)
        return create_async_engine(url, **kwargs)

    url = _resolve_sqlite(url)
    if _is_memory(url):
        # One shared connection, otherwise every checkout sees an empty database.
        kwargs.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
    engine = create_async_engine(url, **kwargs)
    _enable_sqlite_foreign_keys(engine)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
