"""Unit tests for IdentityService."""

from unittest.mock import AsyncMock

import pytest

from trackrate.domain.access.service.guard import AuthorizationGuard
from trackrate.domain.activity.model.event import ActivityAction
from trackrate.domain.identity.model.actor import Actor, SessionContext
from trackrate.domain.identity.model.engager import Engager
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.value import GuestId, UserId
from trackrate.domain.identity.service.identity import IdentityService
from trackrate.domain.shared.error import (
    AuthorizationError,
    IdentityConflictError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def guest_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_fingerprint.return_value = None
    return repo


@pytest.fixture
def user_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(user_repo, guest_repo, permission_repo, uow, activity) -> IdentityService:
    return IdentityService(
        users=user_repo,
        guests=guest_repo,
        guard=AuthorizationGuard(permissions=permission_repo),
        uow=uow,
        activity=activity,
    )


class TestResolveGuest:
    @pytest.mark.asyncio
    async def test_existing_guest_returned_unchanged(self, service, guest_repo, make_guest):
        existing = make_guest(display_name="Original")
        guest_repo.get_by_fingerprint.return_value = existing

        guest = await service.resolve_guest("fp-abc", "Another Name")

        assert guest is existing
        guest_repo.create_if_absent.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_existing_guest_needs_no_display_name(self, service, guest_repo, make_guest):
        guest_repo.get_by_fingerprint.return_value = make_guest()

        guest = await service.resolve_guest("fp-abc")

        assert guest.display_name == "Guesty"

    @pytest.mark.asyncio
    async def test_creates_with_trimmed_values(self, service, guest_repo, uow, make_guest):
        guest_repo.create_if_absent.return_value = make_guest(fingerprint="fp-new")

        await service.resolve_guest("  fp-new ", "  Mia ")

        guest_repo.get_by_fingerprint.assert_awaited_once_with("fp-new")
        guest_repo.create_if_absent.assert_awaited_once_with("fp-new", "Mia")
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_blank_fingerprint(self, service, guest_repo):
        with pytest.raises(ValidationError) as exc_info:
            await service.resolve_guest("   ", "Mia")

        assert exc_info.value.code == "INVALID_FINGERPRINT"
        guest_repo.get_by_fingerprint.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_new_guest_requires_name(self, service):
        with pytest.raises(ValidationError) as exc_info:
            await service.resolve_guest("fp-new")

        assert exc_info.value.code == "MISSING_DISPLAY_NAME"

    @pytest.mark.asyncio
    async def test_new_guest_name_too_short(self, service, guest_repo):
        with pytest.raises(ValidationError) as exc_info:
            await service.resolve_guest("fp-new", " A ")

        assert exc_info.value.code == "INVALID_DISPLAY_NAME"
        assert exc_info.value.field == "display_name"
        guest_repo.create_if_absent.assert_not_awaited()


class TestRenameGuest:
    @pytest.mark.asyncio
    async def test_moderator_renames(
        self, service, guest_repo, activity, moderator: Actor, make_guest
    ):
        guest_repo.get.return_value = make_guest(display_name="Rude Name")
        guest_repo.rename.return_value = make_guest(display_name="Listener")

        guest = await service.rename_guest(GuestId(7), " Listener ", moderator)

        assert guest.display_name == "Listener"
        guest_repo.rename.assert_awaited_once_with(GuestId(7), "Listener")
        activity.record.assert_awaited_once()
        call = activity.record.await_args
        assert call.args[1] is ActivityAction.GUEST_RENAMED
        assert call.kwargs["details"] == {"from": "Rude Name", "to": "Listener"}

    @pytest.mark.asyncio
    async def test_banned_staff_cannot_rename(self, service, guest_repo):
        banned = Actor(user_id=UserId(3), role=Role.MODERATOR, banned=True)

        with pytest.raises(AuthorizationError) as exc_info:
            await service.rename_guest(GuestId(7), "Listener", banned)

        assert exc_info.value.code == "BANNED"
        guest_repo.rename.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_guest(self, service, guest_repo, activity, moderator: Actor):
        guest_repo.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await service.rename_guest(GuestId(70), "Listener", moderator)

        assert exc_info.value.code == "GUEST_NOT_FOUND"
        activity.record.assert_not_awaited()


class TestEngagerFor:
    @pytest.mark.asyncio
    async def test_session_and_fingerprint_conflict(self, service, moderator: Actor):
        context = SessionContext(actor=moderator, fingerprint="fp-abc")

        with pytest.raises(IdentityConflictError):
            await service.engager_for(context)

    @pytest.mark.asyncio
    async def test_neither_identity_conflicts(self, service):
        with pytest.raises(IdentityConflictError):
            await service.engager_for(SessionContext(fingerprint="   "))

    @pytest.mark.asyncio
    async def test_session_becomes_user_engager(self, service, moderator: Actor):
        engager = await service.engager_for(SessionContext(actor=moderator))
        assert engager == Engager.for_user(moderator.user_id)

    @pytest.mark.asyncio
    async def test_fingerprint_becomes_guest_engager(self, service, guest_repo, make_guest):
        guest_repo.get_by_fingerprint.return_value = make_guest(guest_id=12)

        engager = await service.engager_for(SessionContext(fingerprint="fp-abc"))

        assert engager == Engager.for_guest(GuestId(12))

    @pytest.mark.asyncio
    async def test_unresolved_fingerprint(self, service):
        with pytest.raises(NotFoundError) as exc_info:
            await service.engager_for(SessionContext(fingerprint="fp-unknown"))

        assert exc_info.value.code == "GUEST_NOT_FOUND"


@pytest.mark.asyncio
async def test_get_user_not_found(service, user_repo):
    user_repo.get.return_value = None

    with pytest.raises(NotFoundError) as exc_info:
        await service.get_user(UserId(8))

    assert exc_info.value.code == "USER_NOT_FOUND"
