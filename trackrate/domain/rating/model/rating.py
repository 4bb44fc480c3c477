"""Rating aggregate and read-time score views."""

from datetime import datetime
from statistics import fmean
from typing import NewType

from trackrate.domain.catalog.model.value import ArtistId, TrackId
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.rating.model.scores import RatingScores
from trackrate.domain.shared.model.aggregate import Aggregate
from trackrate.domain.shared.model.value import ValueObject

RatingId = NewType("RatingId", int)


class Rating(Aggregate):
    """One rater's scores for one track.

    Invariants:
    - (track_id, user_id) is unique
    - Lifecycle is NONE -> RATED -> DELETED; resubmission updates in place
    """

    id: RatingId
    track_id: TrackId
    user_id: UserId
    scores: RatingScores
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def overall(self) -> float:
        return self.scores.mean


class RatingView(ValueObject):
    """A rating joined with its rater's username and current display name."""

    rating: Rating
    username: str
    display_name: str | None = None


class RatingSubmission(ValueObject):
    """Outcome of a submit: the stored rating and whether it was newly created."""

    rating: Rating
    created: bool


class TrackScore(ValueObject):
    track_id: TrackId
    rating_count: int
    overall: float | None = None

    @classmethod
    def from_scores(cls, track_id: TrackId, scores: list[RatingScores]) -> "TrackScore":
        return cls(
            track_id=track_id,
            rating_count=len(scores),
            overall=fmean(s.mean for s in scores) if scores else None,
        )


class ArtistScore(ValueObject):
    """Mean of each rated track's own mean. Unrated tracks do not count."""

    artist_id: ArtistId
    rated_tracks: int
    overall: float | None = None

    @classmethod
    def from_tracks(cls, artist_id: ArtistId, tracks: list[TrackScore]) -> "ArtistScore":
        rated = [t.overall for t in tracks if t.overall is not None]
        return cls(
            artist_id=artist_id,
            rated_tracks=len(rated),
            overall=fmean(rated) if rated else None,
        )


class CounterCorrection(ValueObject):
    user_id: UserId
    recorded: int
    actual: int
