"""IdentityService - resolves guests and users into engagement identities."""

import logging

from trackrate.domain.access.model.capability import Capability
from trackrate.domain.access.service.guard import AuthorizationGuard
from trackrate.domain.activity.model.event import ActivityAction
from trackrate.domain.activity.service.activity import ActivityLog
from trackrate.domain.identity.model.actor import Actor, SessionContext
from trackrate.domain.identity.model.engager import Engager
from trackrate.domain.identity.model.guest import (
    GuestIdentity,
    normalize_display_name,
    normalize_fingerprint,
)
from trackrate.domain.identity.model.user import User
from trackrate.domain.identity.model.value import GuestId, UserId
from trackrate.domain.identity.port.repository import GuestRepository, UserRepository
from trackrate.domain.shared.error import IdentityConflictError, NotFoundError
from trackrate.domain.shared.service import Service
from trackrate.domain.shared.uow import UnitOfWork

logger = logging.getLogger(__name__)


class IdentityService(Service):
    users: UserRepository
    guests: GuestRepository
    guard: AuthorizationGuard
    uow: UnitOfWork
    activity: ActivityLog

    async def resolve_guest(
        self,
        fingerprint: str | None,
        display_name: str | None = None,
    ) -> GuestIdentity:
        """Return the guest bound to ``fingerprint``, creating it on first sight.

        An existing guest is returned unchanged and ``display_name`` is ignored.
        Creation requires a display name of at least two characters.
        """
        fingerprint = normalize_fingerprint(fingerprint)

        existing = await self.guests.get_by_fingerprint(fingerprint)
        if existing is not None:
            return existing

        name = normalize_display_name(display_name)
        async with self.uow.transaction():
            guest = await self.guests.create_if_absent(fingerprint, name)

        logger.info("Guest resolved: id=%s", guest.id)
        return guest

    async def get_guest(self, guest_id: GuestId) -> GuestIdentity:
        guest = await self.guests.get(guest_id)
        if guest is None:
            raise NotFoundError(f"Guest not found: {guest_id}", code="GUEST_NOT_FOUND")
        return guest

    async def rename_guest(
        self, guest_id: GuestId, display_name: str | None, actor: Actor
    ) -> GuestIdentity:
        """Staff-only rename. Guests never rename themselves."""
        await self.guard.require(actor, Capability.RENAME_GUESTS)
        name = normalize_display_name(display_name)

        async with self.uow.transaction():
            previous = await self.get_guest(guest_id)
            guest = await self.guests.rename(guest_id, name)
            if guest is None:
                raise NotFoundError(f"Guest not found: {guest_id}", code="GUEST_NOT_FOUND")

        await self.activity.record(
            f"user:{actor.user_id}",
            ActivityAction.GUEST_RENAMED,
            target_type="guest",
            target_id=guest_id,
            details={"from": previous.display_name, "to": name},
        )
        return guest

    async def get_user(self, user_id: UserId) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}", code="USER_NOT_FOUND")
        return user

    async def engager_for(self, context: SessionContext) -> Engager:
        """Turn the request's session into exactly one engagement identity.

        A verified session and a guest fingerprint together, or neither of them,
        is an identity conflict. A fingerprint must belong to an already
        resolved guest.
        """
        has_session = context.actor is not None
        has_fingerprint = bool(context.fingerprint and context.fingerprint.strip())
        if has_session == has_fingerprint:
            raise IdentityConflictError()

        if context.actor is not None:
            return Engager.for_user(context.actor.user_id)

        fingerprint = normalize_fingerprint(context.fingerprint)
        guest = await self.guests.get_by_fingerprint(fingerprint)
        if guest is None:
            raise NotFoundError(
                "No guest identity for this fingerprint", code="GUEST_NOT_FOUND"
            )
        return Engager.for_guest(guest.id)
