"""Integration tests for SQLAlchemyUnitOfWork."""

import pytest
from sqlalchemy import func, select

from trackrate.domain.catalog.model.value import TrackId
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.rating.model.scores import RatingScores
from trackrate.infrastructure.persistence.database import create_session_factory
from trackrate.infrastructure.persistence.repository.identity import SQLAlchemyUserRepository
from trackrate.infrastructure.persistence.repository.rating import SQLAlchemyRatingRepository
from trackrate.infrastructure.persistence.tables import ratings_table, users_table
from trackrate.infrastructure.persistence.uow import SQLAlchemyUnitOfWork

SCORES = RatingScores(vocals=5, production=5, lyrics=5, quality=5, vibe=5)


class TestSQLAlchemyUnitOfWork:
    @pytest.mark.asyncio
    async def test_failure_rolls_back_rating_and_counter(self, engine, session, catalog):
        uow = SQLAlchemyUnitOfWork(session)
        ratings = SQLAlchemyRatingRepository(session)
        users = SQLAlchemyUserRepository(session)

        with pytest.raises(RuntimeError):
            async with uow.transaction():
                await ratings.upsert(TrackId(10), UserId(2), SCORES, None)
                await users.adjust_rated_count(UserId(2), 1)
                raise RuntimeError("boom")

        async with create_session_factory(engine)() as fresh:
            live = await fresh.execute(select(func.count()).select_from(ratings_table))
            counter = await fresh.execute(
                select(users_table.c.tracks_rated_count).where(users_table.c.id == 2)
            )
            assert live.scalar_one() == 0
            assert counter.scalar_one() == 0

    @pytest.mark.asyncio
    async def test_success_commits(self, engine, session, catalog):
        uow = SQLAlchemyUnitOfWork(session)

        async with uow.transaction():
            await SQLAlchemyRatingRepository(session).upsert(TrackId(10), UserId(2), SCORES, None)

        async with create_session_factory(engine)() as fresh:
            live = await fresh.execute(select(func.count()).select_from(ratings_table))
            assert live.scalar_one() == 1
