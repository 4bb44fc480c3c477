"""Fixtures for SQLite integration tests."""

from datetime import UTC, datetime

import pytest_asyncio
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from trackrate.config import Config, DatabaseConfig
from trackrate.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from trackrate.infrastructure.persistence.tables import (
    artists_table,
    metadata,
    tracks_table,
    users_table,
)


@pytest_asyncio.fixture
async def engine():
    """Per-test in-memory database with the full schema."""
    config = Config(database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
    engine = create_db_engine(config)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine):
    factory = create_session_factory(engine)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def catalog(session: AsyncSession) -> dict[str, int]:
    """One artist with two tracks and two staff users."""
    now = datetime.now(UTC)
    await session.execute(insert(artists_table).values(id=1, name="Band", created_at=now))
    await session.execute(
        insert(tracks_table),
        [
            {"id": 10, "artist_id": 1, "title": "Opener", "created_at": now},
            {"id": 11, "artist_id": 1, "title": "Closer", "created_at": now},
        ],
    )
    await session.execute(
        insert(users_table),
        [
            {
                "id": uid,
                "username": f"user{uid}",
                "role": role,
                "banned": False,
                "tracks_rated_count": 0,
                "tracks_added_count": 0,
                "created_at": now,
                "updated_at": now,
            }
            for uid, role in ((1, "super_admin"), (2, "moderator"))
        ],
    )
    await session.commit()
    return {"artist": 1, "track": 10, "other_track": 11, "admin": 1, "rater": 2}
