"""RatingAggregator - one rating per (track, rater) with a transactional tally."""

import logging
from collections.abc import Mapping
from typing import Any

from trackrate.domain.access.model.capability import Capability
from trackrate.domain.access.model.decision import Ownership
from trackrate.domain.access.service.guard import AuthorizationGuard
from trackrate.domain.activity.model.event import SYSTEM_ACTOR, ActivityAction
from trackrate.domain.activity.service.activity import ActivityLog
from trackrate.domain.catalog.model.value import ArtistId, EntityType, TrackId
from trackrate.domain.catalog.port.reader import CatalogReader
from trackrate.domain.identity.model.actor import Actor
from trackrate.domain.identity.port.repository import UserRepository
from trackrate.domain.rating.model.rating import (
    ArtistScore,
    CounterCorrection,
    Rating,
    RatingId,
    RatingSubmission,
    RatingView,
    TrackScore,
)
from trackrate.domain.rating.model.scores import RatingScores
from trackrate.domain.rating.port.repository import RatingRepository
from trackrate.domain.shared.error import (
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from trackrate.domain.shared.service import Service
from trackrate.domain.shared.uow import UnitOfWork

logger = logging.getLogger(__name__)


def _normalize_notes(notes: str | None) -> str | None:
    if notes is None:
        return None
    return notes.strip() or None


class RatingAggregator(Service):
    """Submits, edits and deletes ratings and computes read-time averages.

    A rater's ``tracks_rated_count`` changes only in the transaction that
    inserts or deletes one of their ratings. Averages are never stored.
    """

    ratings: RatingRepository
    users: UserRepository
    catalog: CatalogReader
    guard: AuthorizationGuard
    uow: UnitOfWork
    activity: ActivityLog

    async def _require_track(self, track_id: TrackId) -> None:
        if not await self.catalog.exists(EntityType.TRACK, track_id):
            raise NotFoundError(f"Track not found: {track_id}", code="TRACK_NOT_FOUND")

    async def _get_rating(self, rating_id: RatingId, track_id: TrackId | None) -> Rating:
        rating = await self.ratings.get(rating_id)
        if rating is None:
            raise NotFoundError(f"Rating not found: {rating_id}", code="RATING_NOT_FOUND")
        if track_id is not None and rating.track_id != track_id:
            raise ValidationError(
                "Rating does not belong to this track",
                field="track_id",
                code="TRACK_MISMATCH",
            )
        return rating

    async def submit_rating(
        self,
        track_id: TrackId,
        actor: Actor,
        scores: Mapping[str, Any],
        notes: str | None = None,
    ) -> RatingSubmission:
        """Rate a track as ``actor``; a resubmission updates the rating in place."""
        await self.guard.require(actor, Capability.ENGAGE)
        parsed = RatingScores.parse(scores)
        await self._require_track(track_id)

        async with self.uow.transaction():
            rating, created = await self.ratings.upsert(
                track_id, actor.user_id, parsed, _normalize_notes(notes)
            )
            if created:
                await self.users.adjust_rated_count(actor.user_id, 1)

        logger.info(
            "Rating %s: id=%s track=%s user=%s",
            "created" if created else "updated",
            rating.id,
            track_id,
            actor.user_id,
        )
        await self.activity.record(
            f"user:{actor.user_id}",
            ActivityAction.RATING_SUBMITTED if created else ActivityAction.RATING_UPDATED,
            target_type="rating",
            target_id=rating.id,
            details={"track_id": track_id, "overall": rating.overall},
        )
        return RatingSubmission(rating=rating, created=created)

    async def update_rating(
        self,
        rating_id: RatingId,
        actor: Actor,
        scores: Mapping[str, Any],
        notes: str | None = None,
        track_id: TrackId | None = None,
    ) -> Rating:
        """Edit an existing rating. Other raters' ratings need ``can_edit_others_ratings``."""
        rating = await self._get_rating(rating_id, track_id)
        await self.guard.require(
            actor, Capability.EDIT_OTHERS_RATINGS, Ownership(owner_id=rating.user_id)
        )
        parsed = RatingScores.parse(scores)

        async with self.uow.transaction():
            updated = await self.ratings.update_scores(
                rating_id, parsed, _normalize_notes(notes)
            )
            if updated is None:
                raise InvalidStateError(
                    f"Rating {rating_id} was deleted", code="RATING_ALREADY_DELETED"
                )

        await self.activity.record(
            f"user:{actor.user_id}",
            ActivityAction.RATING_UPDATED,
            target_type="rating",
            target_id=rating_id,
            details={"track_id": updated.track_id, "rater_id": updated.user_id},
        )
        return updated

    async def delete_rating(
        self,
        rating_id: RatingId,
        actor: Actor,
        track_id: TrackId | None = None,
    ) -> None:
        """Delete a rating and decrement its rater's tally by exactly one."""
        rating = await self._get_rating(rating_id, track_id)
        await self.guard.require(
            actor, Capability.DELETE_OTHERS_RATINGS, Ownership(owner_id=rating.user_id)
        )

        async with self.uow.transaction():
            deleted = await self.ratings.delete(rating_id)
            if deleted is None:
                raise InvalidStateError(
                    f"Rating {rating_id} was already deleted",
                    code="RATING_ALREADY_DELETED",
                )
            await self.users.adjust_rated_count(deleted.user_id, -1)

        logger.info(
            "Rating deleted: id=%s rater=%s by=%s", rating_id, deleted.user_id, actor.user_id
        )
        await self.activity.record(
            f"user:{actor.user_id}",
            ActivityAction.RATING_DELETED,
            target_type="rating",
            target_id=rating_id,
            details={"track_id": deleted.track_id, "rater_id": deleted.user_id},
        )

    async def list_track_ratings(self, track_id: TrackId) -> list[RatingView]:
        await self._require_track(track_id)
        return await self.ratings.list_for_track(track_id)

    async def track_score(self, track_id: TrackId) -> TrackScore:
        await self._require_track(track_id)
        scores = await self.ratings.scores_for_track(track_id)
        return TrackScore.from_scores(track_id, scores)

    async def artist_score(self, artist_id: ArtistId) -> ArtistScore:
        if not await self.catalog.exists(EntityType.ARTIST, artist_id):
            raise NotFoundError(f"Artist not found: {artist_id}", code="ARTIST_NOT_FOUND")
        by_track = await self.ratings.scores_for_artist(artist_id)
        tracks = [TrackScore.from_scores(tid, scores) for tid, scores in by_track.items()]
        return ArtistScore.from_tracks(artist_id, tracks)

    async def reconcile_counters(self, actor: Actor | None = None) -> list[CounterCorrection]:
        """Recompute every rater's tally from live rows.

        ``actor`` is None only for operator invocations from the CLI, which run
        with direct database access.
        """
        if actor is not None:
            await self.guard.require(actor, Capability.RECONCILE_COUNTERS)

        async with self.uow.transaction():
            corrections = await self.ratings.reconcile_counters()

        if corrections:
            logger.warning("Rating counters drifted for %d users; corrected", len(corrections))
        await self.activity.record(
            f"user:{actor.user_id}" if actor is not None else SYSTEM_ACTOR,
            ActivityAction.COUNTERS_RECONCILED,
            details={"corrected": len(corrections)},
        )
        return corrections
