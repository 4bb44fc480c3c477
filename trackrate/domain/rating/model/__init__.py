"""Rating domain models."""

from .rating import (
    ArtistScore,
    CounterCorrection,
    Rating,
    RatingId,
    RatingSubmission,
    TrackScore,
)
from .scores import CRITERIA, RatingScores

__all__ = [
    "CRITERIA",
    "ArtistScore",
    "CounterCorrection",
    "Rating",
    "RatingId",
    "RatingScores",
    "RatingSubmission",
    "TrackScore",
]
