"""Rating routes and read-time score views."""

from datetime import datetime
from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response
from pydantic import BaseModel

from trackrate.domain.catalog.model.value import ArtistId, TrackId
from trackrate.domain.identity.model.actor import Actor
from trackrate.domain.rating.model.rating import Rating, RatingId, RatingView
from trackrate.domain.rating.service.aggregator import RatingAggregator

router = APIRouter(tags=["Ratings"], route_class=DishkaRoute)


class RatingRequest(BaseModel):
    """Scores are validated by the aggregator so each failure carries its own code."""

    vocals: Any = None
    production: Any = None
    lyrics: Any = None
    quality: Any = None
    vibe: Any = None
    notes: str | None = None

    def scores(self) -> dict[str, Any]:
        return self.model_dump(exclude={"notes"})


class RatingResponse(BaseModel):
    id: int
    track_id: int
    user_id: int
    vocals: int
    production: int
    lyrics: int
    quality: int
    vibe: int
    overall: float
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_rating(cls, rating: Rating) -> "RatingResponse":
        return cls(
            id=rating.id,
            track_id=rating.track_id,
            user_id=rating.user_id,
            overall=rating.overall,
            notes=rating.notes,
            created_at=rating.created_at,
            updated_at=rating.updated_at,
            **rating.scores.model_dump(),
        )


class RatingListItem(RatingResponse):
    username: str
    display_name: str | None = None

    @classmethod
    def from_view(cls, view: RatingView) -> "RatingListItem":
        base = RatingResponse.from_rating(view.rating)
        return cls(
            **base.model_dump(), username=view.username, display_name=view.display_name
        )


class TrackScoreResponse(BaseModel):
    track_id: int
    rating_count: int
    overall: float | None = None


class ArtistScoreResponse(BaseModel):
    artist_id: int
    rated_tracks: int
    overall: float | None = None


@router.post("/tracks/{track_id}/ratings", response_model=RatingResponse)
async def submit_rating(
    track_id: int,
    body: RatingRequest,
    response: Response,
    actor: FromDishka[Actor],
    aggregator: FromDishka[RatingAggregator],
) -> RatingResponse:
    """Rate a track. 201 on first submission, 200 when an existing rating was updated."""
    result = await aggregator.submit_rating(TrackId(track_id), actor, body.scores(), body.notes)
    response.status_code = 201 if result.created else 200
    return RatingResponse.from_rating(result.rating)


@router.get("/tracks/{track_id}/ratings", response_model=list[RatingListItem])
async def list_track_ratings(
    track_id: int,
    aggregator: FromDishka[RatingAggregator],
) -> list[RatingListItem]:
    """Newest first, with each rater's username and display name."""
    views = await aggregator.list_track_ratings(TrackId(track_id))
    return [RatingListItem.from_view(v) for v in views]


@router.put("/tracks/{track_id}/ratings/{rating_id}", response_model=RatingResponse)
async def update_rating(
    track_id: int,
    rating_id: int,
    body: RatingRequest,
    actor: FromDishka[Actor],
    aggregator: FromDishka[RatingAggregator],
) -> RatingResponse:
    rating = await aggregator.update_rating(
        RatingId(rating_id), actor, body.scores(), body.notes, track_id=TrackId(track_id)
    )
    return RatingResponse.from_rating(rating)


@router.delete("/tracks/{track_id}/ratings/{rating_id}", status_code=204)
async def delete_rating(
    track_id: int,
    rating_id: int,
    actor: FromDishka[Actor],
    aggregator: FromDishka[RatingAggregator],
) -> Response:
    await aggregator.delete_rating(RatingId(rating_id), actor, track_id=TrackId(track_id))
    return Response(status_code=204)


@router.get("/tracks/{track_id}/score", response_model=TrackScoreResponse)
async def track_score(
    track_id: int,
    aggregator: FromDishka[RatingAggregator],
) -> TrackScoreResponse:
    score = await aggregator.track_score(TrackId(track_id))
    return TrackScoreResponse(**score.model_dump())


@router.get("/artists/{artist_id}/score", response_model=ArtistScoreResponse)
async def artist_score(
    artist_id: int,
    aggregator: FromDishka[RatingAggregator],
) -> ArtistScoreResponse:
    score = await aggregator.artist_score(ArtistId(artist_id))
    return ArtistScoreResponse(**score.model_dump())
