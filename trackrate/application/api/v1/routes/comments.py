"""Track comment routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response
from pydantic import BaseModel

from trackrate.domain.catalog.model.value import TrackId
from trackrate.domain.engagement.model.comment import CommentId, CommentView
from trackrate.domain.engagement.service.ledger import EngagementLedger
from trackrate.domain.identity.model.actor import SessionContext
from trackrate.domain.identity.service.identity import IdentityService

router = APIRouter(prefix="/tracks/{track_id}/comments", tags=["Comments"], route_class=DishkaRoute)


class CommentRequest(BaseModel):
    body: str | None = None


class CommentResponse(BaseModel):
    id: int
    track_id: int
    user_id: int | None = None
    guest_id: int | None = None
    body: str
    display_name: str | None = None
    role: str | None = None
    created_at: datetime

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentResponse":
        return cls(
            id=view.id,
            track_id=view.track_id,
            user_id=view.user_id,
            guest_id=view.guest_id,
            body=view.body,
            display_name=view.display_name,
            role=view.role.value if view.role else None,
            created_at=view.created_at,
        )


@router.get("", response_model=list[CommentResponse])
async def list_comments(
    track_id: int,
    ledger: FromDishka[EngagementLedger],
) -> list[CommentResponse]:
    """Comments on a track, newest first."""
    views = await ledger.list_comments(TrackId(track_id))
    return [CommentResponse.from_view(v) for v in views]


@router.post("", response_model=CommentResponse, status_code=201)
async def post_comment(
    track_id: int,
    body: CommentRequest,
    context: FromDishka[SessionContext],
    identity: FromDishka[IdentityService],
    ledger: FromDishka[EngagementLedger],
) -> CommentResponse:
    engager = await identity.engager_for(context)
    comment = await ledger.post_comment(TrackId(track_id), engager, body.body)
    return CommentResponse(
        id=comment.id,
        track_id=comment.track_id,
        user_id=comment.user_id,
        guest_id=comment.guest_id,
        body=comment.body,
        created_at=comment.created_at,
    )


@router.delete("/{comment_id}", status_code=204)
async def delete_comment(
    track_id: int,
    comment_id: int,
    context: FromDishka[SessionContext],
    identity: FromDishka[IdentityService],
    ledger: FromDishka[EngagementLedger],
) -> Response:
    """Delete a comment as its author or as staff."""
    engager = await identity.engager_for(context)
    await ledger.delete_comment(CommentId(comment_id), engager, track_id=TrackId(track_id))
    return Response(status_code=204)
