"""Public award catalogue. Changes go through the admin routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from pydantic import BaseModel

from trackrate.domain.access.model.award import Award, AwardId
from trackrate.domain.access.service.admin import MAX_AWARD_PAGE, AdminService

router = APIRouter(prefix="/awards", tags=["Awards"], route_class=DishkaRoute)


class AwardResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    created_at: datetime

    @classmethod
    def from_award(cls, award: Award) -> "AwardResponse":
        return cls(
            id=award.id,
            name=award.name,
            description=award.description,
            created_at=award.created_at,
        )


@router.get("", response_model=list[AwardResponse])
async def list_awards(
    admin: FromDishka[AdminService],
    limit: int = Query(default=50, ge=1, le=MAX_AWARD_PAGE),
    offset: int = Query(default=0, ge=0),
) -> list[AwardResponse]:
    """Newest first."""
    awards = await admin.list_awards(limit, offset)
    return [AwardResponse.from_award(a) for a in awards]


@router.get("/{award_id}", response_model=AwardResponse)
async def get_award(award_id: int, admin: FromDishka[AdminService]) -> AwardResponse:
    return AwardResponse.from_award(await admin.get_award(AwardId(award_id)))
