"""Guest identity routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from trackrate.domain.identity.model.actor import Actor
from trackrate.domain.identity.model.guest import GuestIdentity
from trackrate.domain.identity.model.value import GuestId
from trackrate.domain.identity.service.identity import IdentityService

router = APIRouter(prefix="/guests", tags=["Guests"], route_class=DishkaRoute)


class ResolveGuestRequest(BaseModel):
    fingerprint: str | None = None
    display_name: str | None = None


class RenameGuestRequest(BaseModel):
    display_name: str | None = None


class GuestResponse(BaseModel):
    id: int
    display_name: str
    created_at: datetime

    @classmethod
    def from_guest(cls, guest: GuestIdentity) -> "GuestResponse":
        return cls(id=guest.id, display_name=guest.display_name, created_at=guest.created_at)


@router.post("", response_model=GuestResponse)
async def resolve_guest(
    body: ResolveGuestRequest,
    service: FromDishka[IdentityService],
) -> GuestResponse:
    """Return the guest bound to a fingerprint, creating it on first use."""
    guest = await service.resolve_guest(body.fingerprint, body.display_name)
    return GuestResponse.from_guest(guest)


@router.get("/{guest_id}", response_model=GuestResponse)
async def get_guest(guest_id: int, service: FromDishka[IdentityService]) -> GuestResponse:
    guest = await service.get_guest(GuestId(guest_id))
    return GuestResponse.from_guest(guest)


@router.patch("/{guest_id}", response_model=GuestResponse)
async def rename_guest(
    guest_id: int,
    body: RenameGuestRequest,
    actor: FromDishka[Actor],
    service: FromDishka[IdentityService],
) -> GuestResponse:
    """Rename a guest. Staff only."""
    guest = await service.rename_guest(GuestId(guest_id), body.display_name, actor)
    return GuestResponse.from_guest(guest)
