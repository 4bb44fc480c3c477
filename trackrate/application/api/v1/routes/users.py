"""Public user profile routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from trackrate.application.api.v1.routes.awards import AwardResponse
from trackrate.domain.access.model.award import Award
from trackrate.domain.access.service.admin import AdminService
from trackrate.domain.identity.model.user import User
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.identity.service.identity import IdentityService

router = APIRouter(prefix="/users", tags=["Users"], route_class=DishkaRoute)


class UserResponse(BaseModel):
    id: int
    username: str
    display_name: str
    role: str
    banned: bool
    tracks_rated_count: int
    tracks_added_count: int
    created_at: datetime
    awards: list[AwardResponse] = []

    @classmethod
    def from_user(cls, user: User, awards: list[Award] | None = None) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            display_name=user.name,
            role=user.role.value,
            banned=user.banned,
            tracks_rated_count=user.tracks_rated_count,
            tracks_added_count=user.tracks_added_count,
            created_at=user.created_at,
            awards=[AwardResponse.from_award(a) for a in awards or []],
        )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    identity: FromDishka[IdentityService],
    admin: FromDishka[AdminService],
) -> UserResponse:
    user = await identity.get_user(UserId(user_id))
    awards = await admin.list_user_awards(user.id)
    return UserResponse.from_user(user, awards)
