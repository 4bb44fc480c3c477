"""Dialect-specific INSERT constructs for race-safe writes."""

from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from trackrate.domain.shared.error import ConfigurationError


def dialect_insert(session: AsyncSession, table: Table):
    """INSERT supporting ``on_conflict_do_nothing`` for the session's backend."""
    name = session.bind.dialect.name
    if name == "postgresql":
        return postgresql.insert(table)
    if name == "sqlite":
        return sqlite.insert(table)
    raise ConfigurationError(f"Unsupported database dialect: {name}")
