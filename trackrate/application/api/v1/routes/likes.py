"""Like routes for artists and tracks."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from trackrate.domain.catalog.model.value import EntityType
from trackrate.domain.engagement.service.ledger import EngagementLedger
from trackrate.domain.identity.model.actor import SessionContext
from trackrate.domain.identity.service.identity import IdentityService

router = APIRouter(tags=["Likes"], route_class=DishkaRoute)


class LikeResponse(BaseModel):
    total_likes: int


class LikeStatusResponse(BaseModel):
    total_likes: int
    liked: bool


async def _like(
    entity_type: EntityType,
    entity_id: int,
    context: SessionContext,
    identity: IdentityService,
    ledger: EngagementLedger,
) -> LikeResponse:
    engager = await identity.engager_for(context)
    result = await ledger.like(entity_type, entity_id, engager)
    return LikeResponse(total_likes=result.total_likes)


async def _unlike(
    entity_type: EntityType,
    entity_id: int,
    context: SessionContext,
    identity: IdentityService,
    ledger: EngagementLedger,
) -> LikeResponse:
    engager = await identity.engager_for(context)
    result = await ledger.unlike(entity_type, entity_id, engager)
    return LikeResponse(total_likes=result.total_likes)


async def _status(
    entity_type: EntityType,
    entity_id: int,
    context: SessionContext,
    identity: IdentityService,
    ledger: EngagementLedger,
) -> LikeStatusResponse:
    # Anonymous readers without a fingerprint still get the total
    engager = None
    if context.actor is not None or context.fingerprint:
        engager = await identity.engager_for(context)
    status = await ledger.like_status(entity_type, entity_id, engager)
    return LikeStatusResponse(total_likes=status.total_likes, liked=status.liked)


@router.post("/artists/{artist_id}/likes", response_model=LikeResponse, status_code=201)
async def like_artist(
    artist_id: int,
    context: FromDishka[SessionContext],
    identity: FromDishka[IdentityService],
    ledger: FromDishka[EngagementLedger],
) -> LikeResponse:
    return await _like(EntityType.ARTIST, artist_id, context, identity, ledger)


@router.delete("/artists/{artist_id}/likes", response_model=LikeResponse)
async def unlike_artist(
    artist_id: int,
    context: FromDishka[SessionContext],
    identity: FromDishka[IdentityService],
    ledger: FromDishka[EngagementLedger],
) -> LikeResponse:
    return await _unlike(EntityType.ARTIST, artist_id, context, identity, ledger)


@router.get("/artists/{artist_id}/likes", response_model=LikeStatusResponse)
async def artist_like_status(
    artist_id: int,
    context: FromDishka[SessionContext],
    identity: FromDishka[IdentityService],
    ledger: FromDishka[EngagementLedger],
) -> LikeStatusResponse:
    return await _status(EntityType.ARTIST, artist_id, context, identity, ledger)


@router.post("/tracks/{track_id}/likes", response_model=LikeResponse, status_code=201)
async def like_track(
    track_id: int,
    context: FromDishka[SessionContext],
    identity: FromDishka[IdentityService],
    ledger: FromDishka[EngagementLedger],
) -> LikeResponse:
    return await _like(EntityType.TRACK, track_id, context, identity, ledger)


@router.delete("/tracks/{track_id}/likes", response_model=LikeResponse)
async def unlike_track(
    track_id: int,
    context: FromDishka[SessionContext],
    identity: FromDishka[IdentityService],
    ledger: FromDishka[EngagementLedger],
) -> LikeResponse:
    return await _unlike(EntityType.TRACK, track_id, context, identity, ledger)


@router.get("/tracks/{track_id}/likes", response_model=LikeStatusResponse)
async def track_like_status(
    track_id: int,
    context: FromDishka[SessionContext],
    identity: FromDishka[IdentityService],
    ledger: FromDishka[EngagementLedger],
) -> LikeStatusResponse:
    return await _status(EntityType.TRACK, track_id, context, identity, ledger)
