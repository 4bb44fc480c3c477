from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from pydantic import BaseModel

from trackrate.domain.access.service.admin import AdminService
from trackrate.domain.activity.model.event import MAX_ACTIVITY_PAGE, ActivityAction, ActivityFilter
from trackrate.domain.identity.model.actor import Actor

router = APIRouter(prefix="/activity", tags=["Activity"], route_class=DishkaRoute)


class ActivityResponse(BaseModel):
    actor_id: str
    action: str
    target_type: str | None = None
    target_id: int | None = None
    details: dict | None = None
    created_at: datetime


@router.get("", response_model=list[ActivityResponse])
async def list_activity(
    actor: FromDishka[Actor],
    service: FromDishka[AdminService],
    actor_id: str | None = None,
    action: ActivityAction | None = None,
    since: datetime | None = None,
    until: datetime | None = None,
    limit: int = Query(default=50, ge=1, le=MAX_ACTIVITY_PAGE),
    offset: int = Query(default=0, ge=0),
) -> list[ActivityResponse]:
    """Activity log, newest first. Super admins only."""
    events = await service.list_activity(
        actor,
        ActivityFilter(
            actor_id=actor_id,
            action=action,
            since=since,
            until=until,
            limit=limit,
            offset=offset,
        ),
    )
    return [ActivityResponse(**e.model_dump(mode="json")) for e in events]
