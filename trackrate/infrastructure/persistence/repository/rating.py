"""SQLAlchemy repository implementation for ratings."""

from collections import defaultdict
from datetime import UTC, datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trackrate.domain.catalog.model.value import ArtistId, TrackId
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.rating.model.rating import (
    CounterCorrection,
    Rating,
    RatingId,
    RatingView,
)
from trackrate.domain.rating.model.scores import CRITERIA, RatingScores
from trackrate.domain.rating.port.repository import RatingRepository
from trackrate.infrastructure.persistence.dialect import dialect_insert
from trackrate.infrastructure.persistence.tables import (
    ratings_table,
    tracks_table,
    users_table,
)

_SCORE_COLUMNS = [ratings_table.c[name] for name in CRITERIA]


def _row_to_scores(row) -> RatingScores:
    return RatingScores(**{name: row[name] for name in CRITERIA})


def _row_to_rating(row: dict) -> Rating:
    return Rating(
        id=RatingId(row["id"]),
        track_id=TrackId(row["track_id"]),
        user_id=UserId(row["user_id"]),
        scores=_row_to_scores(row),
        notes=row["notes"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class SQLAlchemyRatingRepository(RatingRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def upsert(
        self,
        track_id: TrackId,
        user_id: UserId,
        scores: RatingScores,
        notes: str | None,
    ) -> tuple[Rating, bool]:
        now = datetime.now(UTC)
        insert_stmt = (
            dialect_insert(self.session, ratings_table)
            .values(
                track_id=track_id,
                user_id=user_id,
                notes=notes,
                created_at=now,
                updated_at=now,
                **scores.model_dump(),
            )
            .on_conflict_do_nothing(index_elements=["track_id", "user_id"])
            .returning(*ratings_table.c)
        )
        result = await self.session.execute(insert_stmt)
        row = result.mappings().first()
        if row:
            return _row_to_rating(dict(row)), True

        # The unique constraint rejected the insert, so the row exists: update it
        update_stmt = (
            update(ratings_table)
            .where(
                ratings_table.c.track_id == track_id,
                ratings_table.c.user_id == user_id,
            )
            .values(notes=notes, updated_at=now, **scores.model_dump())
            .returning(*ratings_table.c)
        )
        result = await self.session.execute(update_stmt)
        return _row_to_rating(dict(result.mappings().one())), False

    async def get(self, rating_id: RatingId) -> Rating | None:
        stmt = select(ratings_table).where(ratings_table.c.id == rating_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_rating(dict(row)) if row else None

    async def update_scores(
        self, rating_id: RatingId, scores: RatingScores, notes: str | None
    ) -> Rating | None:
        stmt = (
            update(ratings_table)
            .where(ratings_table.c.id == rating_id)
            .values(notes=notes, updated_at=datetime.now(UTC), **scores.model_dump())
            .returning(*ratings_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_rating(dict(row)) if row else None

    async def delete(self, rating_id: RatingId) -> Rating | None:
        stmt = (
            delete(ratings_table)
            .where(ratings_table.c.id == rating_id)
            .returning(*ratings_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_rating(dict(row)) if row else None

    async def list_for_track(self, track_id: TrackId) -> list[RatingView]:
        stmt = (
            select(
                ratings_table,
                users_table.c.username,
                users_table.c.display_name,
            )
            .join(users_table, ratings_table.c.user_id == users_table.c.id)
            .where(ratings_table.c.track_id == track_id)
            .order_by(ratings_table.c.created_at.desc(), ratings_table.c.id.desc())
        )
        result = await self.session.execute(stmt)
        return [
            RatingView(
                rating=_row_to_rating(dict(row)),
                username=row["username"],
                display_name=row["display_name"],
            )
            for row in result.mappings()
        ]

    async def scores_for_track(self, track_id: TrackId) -> list[RatingScores]:
        stmt = select(*_SCORE_COLUMNS).where(ratings_table.c.track_id == track_id)
        result = await self.session.execute(stmt)
        return [_row_to_scores(row) for row in result.mappings()]

    async def scores_for_artist(self, artist_id: ArtistId) -> dict[TrackId, list[RatingScores]]:
        stmt = (
            select(ratings_table.c.track_id, *_SCORE_COLUMNS)
            .join(tracks_table, tracks_table.c.id == ratings_table.c.track_id)
            .where(tracks_table.c.artist_id == artist_id)
        )
        result = await self.session.execute(stmt)

        by_track: dict[TrackId, list[RatingScores]] = defaultdict(list)
        for row in result.mappings():
            by_track[TrackId(row["track_id"])].append(_row_to_scores(row))
        return dict(by_track)

    async def reconcile_counters(self) -> list[CounterCorrection]:
        live = (
            select(ratings_table.c.user_id, func.count().label("live"))
            .group_by(ratings_table.c.user_id)
            .subquery()
        )
        actual = func.coalesce(live.c.live, 0)
        drifted = (
            select(users_table.c.id, users_table.c.tracks_rated_count, actual.label("actual"))
            .select_from(users_table.outerjoin(live, live.c.user_id == users_table.c.id))
            .where(users_table.c.tracks_rated_count != actual)
            .order_by(users_table.c.id)
        )
        result = await self.session.execute(drifted)
        corrections = [
            CounterCorrection(
                user_id=UserId(row["id"]),
                recorded=row["tracks_rated_count"],
                actual=row["actual"],
            )
            for row in result.mappings()
        ]

        if corrections:
            live_count = (
                select(func.count())
                .select_from(ratings_table)
                .where(ratings_table.c.user_id == users_table.c.id)
                .scalar_subquery()
            )
            await self.session.execute(
                update(users_table)
                .where(users_table.c.id.in_([c.user_id for c in corrections]))
                .values(tracks_rated_count=live_count)
            )
        return corrections
