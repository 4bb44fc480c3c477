"""Repository port for ratings."""

from abc import abstractmethod
from typing import Protocol

from trackrate.domain.catalog.model.value import ArtistId, TrackId
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.rating.model.rating import CounterCorrection, Rating, RatingId, RatingView
from trackrate.domain.rating.model.scores import RatingScores
from trackrate.domain.shared.port import Port


class RatingRepository(Port, Protocol):
    @abstractmethod
    async def upsert(
        self,
        track_id: TrackId,
        user_id: UserId,
        scores: RatingScores,
        notes: str | None,
    ) -> tuple[Rating, bool]:
        """Insert or update the rating keyed on (track_id, user_id).

        The insert-or-update decision is taken by the unique constraint, not by
        a prior read. Returns the stored rating and True when a row was created.
        """
        ...

    @abstractmethod
    async def get(self, rating_id: RatingId) -> Rating | None: ...

    @abstractmethod
    async def update_scores(
        self, rating_id: RatingId, scores: RatingScores, notes: str | None
    ) -> Rating | None: ...

    @abstractmethod
    async def delete(self, rating_id: RatingId) -> Rating | None:
        """Delete and return the removed row, or None if it was already gone."""
        ...

    @abstractmethod
    async def list_for_track(self, track_id: TrackId) -> list[RatingView]:
        """Newest first, each joined with its rater's names."""
        ...

    @abstractmethod
    async def scores_for_track(self, track_id: TrackId) -> list[RatingScores]: ...

    @abstractmethod
    async def scores_for_artist(self, artist_id: ArtistId) -> dict[TrackId, list[RatingScores]]:
        """Live scores of every rated track by the artist, keyed by track."""
        ...

    @abstractmethod
    async def reconcile_counters(self) -> list[CounterCorrection]:
        """Reset every drifted ``tracks_rated_count`` to the live row count."""
        ...
