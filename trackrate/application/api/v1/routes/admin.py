"""Administration routes: users, roles, bans, permissions, awards, counters.

Every route requires a bearer session; the services enforce super_admin.
"""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response
from pydantic import BaseModel

from trackrate.application.api.v1.routes.awards import AwardResponse
from trackrate.application.api.v1.routes.users import UserResponse
from trackrate.domain.access.model.award import AwardId, AwardUpdate
from trackrate.domain.access.model.permission import PermissionSet, PermissionUpdate
from trackrate.domain.access.service.admin import AdminService
from trackrate.domain.identity.model.actor import Actor
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.rating.service.aggregator import RatingAggregator

router = APIRouter(prefix="/admin", tags=["Admin"], route_class=DishkaRoute)


class CreateUserRequest(BaseModel):
    username: str
    display_name: str | None = None
    role: str


class ChangeRoleRequest(BaseModel):
    role: str


class BanRequest(BaseModel):
    banned: bool


class PermissionsResponse(BaseModel):
    user_id: int
    can_edit_others_ratings: bool
    can_delete_others_ratings: bool
    can_verify_artists: bool
    can_add_artists: bool
    can_delete_artists: bool

    @classmethod
    def from_permissions(cls, permissions: PermissionSet) -> "PermissionsResponse":
        return cls(**permissions.model_dump(exclude={"created_at", "updated_at"}))


class CreateAwardRequest(BaseModel):
    name: str
    description: str | None = None


class AssignAwardRequest(BaseModel):
    user_id: int


class UserAwardResponse(BaseModel):
    award_id: int
    user_id: int
    assigned_by: int
    assigned_at: datetime


class CounterCorrectionResponse(BaseModel):
    user_id: int
    recorded: int
    actual: int


@router.post("/users", response_model=UserResponse, status_code=201)
async def create_user(
    body: CreateUserRequest,
    actor: FromDishka[Actor],
    service: FromDishka[AdminService],
) -> UserResponse:
    user = await service.create_user(actor, body.username, body.display_name, Role.parse(body.role))
    return UserResponse.from_user(user)


@router.patch("/users/{user_id}/role", response_model=UserResponse)
async def change_role(
    user_id: int,
    body: ChangeRoleRequest,
    actor: FromDishka[Actor],
    service: FromDishka[AdminService],
) -> UserResponse:
    user = await service.change_role(UserId(user_id), actor, Role.parse(body.role))
    return UserResponse.from_user(user)


@router.put("/users/{user_id}/ban", response_model=UserResponse)
async def set_ban(
    user_id: int,
    body: BanRequest,
    actor: FromDishka[Actor],
    service: FromDishka[AdminService],
) -> UserResponse:
    user = await service.set_ban(UserId(user_id), actor, body.banned)
    return UserResponse.from_user(user)


@router.get("/users/{user_id}/permissions", response_model=PermissionsResponse)
async def get_permissions(
    user_id: int,
    actor: FromDishka[Actor],
    service: FromDishka[AdminService],
) -> PermissionsResponse:
    permissions = await service.get_permissions(UserId(user_id), actor)
    return PermissionsResponse.from_permissions(permissions)


@router.put("/users/{user_id}/permissions", response_model=PermissionsResponse)
async def set_permissions(
    user_id: int,
    body: PermissionUpdate,
    actor: FromDishka[Actor],
    service: FromDishka[AdminService],
) -> PermissionsResponse:
    """Partial update: omitted flags keep their current value."""
    permissions = await service.set_permissions(UserId(user_id), actor, body)
    return PermissionsResponse.from_permissions(permissions)


@router.post("/awards", response_model=AwardResponse, status_code=201)
async def create_award(
    body: CreateAwardRequest,
    actor: FromDishka[Actor],
    service: FromDishka[AdminService],
) -> AwardResponse:
    award = await service.create_award(actor, body.name, body.description)
    return AwardResponse.from_award(award)


@router.patch("/awards/{award_id}", response_model=AwardResponse)
async def update_award(
    award_id: int,
    body: AwardUpdate,
    actor: FromDishka[Actor],
    service: FromDishka[AdminService],
) -> AwardResponse:
    """Partial update: omitted fields keep their current value."""
    award = await service.update_award(AwardId(award_id), actor, body)
    return AwardResponse.from_award(award)


@router.delete("/awards/{award_id}", status_code=204)
async def delete_award(
    award_id: int,
    actor: FromDishka[Actor],
    service: FromDishka[AdminService],
) -> Response:
    await service.delete_award(AwardId(award_id), actor)
    return Response(status_code=204)


@router.post("/awards/{award_id}/assignments", response_model=UserAwardResponse, status_code=201)
async def assign_award(
    award_id: int,
    body: AssignAwardRequest,
    actor: FromDishka[Actor],
    service: FromDishka[AdminService],
) -> UserAwardResponse:
    grant = await service.assign_award(AwardId(award_id), UserId(body.user_id), actor)
    return UserAwardResponse(**grant.model_dump(exclude={"id"}))


@router.delete("/awards/{award_id}/assignments/{user_id}", status_code=204)
async def revoke_award(
    award_id: int,
    user_id: int,
    actor: FromDishka[Actor],
    service: FromDishka[AdminService],
) -> Response:
    await service.revoke_award(AwardId(award_id), UserId(user_id), actor)
    return Response(status_code=204)


@router.post("/reconcile", response_model=list[CounterCorrectionResponse])
async def reconcile_counters(
    actor: FromDishka[Actor],
    aggregator: FromDishka[RatingAggregator],
) -> list[CounterCorrectionResponse]:
    """Recompute every rater's tally from live ratings."""
    corrections = await aggregator.reconcile_counters(actor)
    return [CounterCorrectionResponse(**c.model_dump()) for c in corrections]
