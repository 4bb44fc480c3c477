"""Unit tests for AdminService."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from trackrate.domain.access.model.award import Award, AwardId, AwardUpdate, UserAward
from trackrate.domain.access.model.permission import PermissionSet, PermissionUpdate
from trackrate.domain.access.service.admin import AdminService
from trackrate.domain.access.service.guard import AuthorizationGuard
from trackrate.domain.activity.model.event import ActivityAction, ActivityFilter
from trackrate.domain.identity.model.actor import Actor
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.shared.error import (
    AuthorizationError,
    DuplicateError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def user_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def award_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(user_repo, permission_repo, award_repo, uow, activity) -> AdminService:
    return AdminService(
        users=user_repo,
        permissions=permission_repo,
        awards=award_repo,
        activity_reader=AsyncMock(),
        guard=AuthorizationGuard(permissions=permission_repo),
        uow=uow,
        activity=activity,
    )


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_creates_user_and_records_activity(
        self, service, user_repo, activity, uow, super_admin: Actor, make_user
    ):
        user_repo.create.return_value = make_user(20, Role.MODERATOR, username="newbie")

        user = await service.create_user(super_admin, "newbie", "  New Bie ", Role.MODERATOR)

        assert user.username == "newbie"
        user_repo.create.assert_awaited_once_with("newbie", "New Bie", Role.MODERATOR)
        assert uow.commits == 1
        activity.record.assert_awaited_once()
        assert activity.record.await_args.args[1] is ActivityAction.USER_CREATED

    @pytest.mark.asyncio
    async def test_rejects_invalid_username(self, service, user_repo, super_admin: Actor):
        with pytest.raises(ValidationError) as exc_info:
            await service.create_user(super_admin, "no spaces!", None, Role.ADMIN)

        assert exc_info.value.code == "INVALID_USERNAME"
        user_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_username(self, service, user_repo, uow, super_admin: Actor):
        user_repo.create.return_value = None

        with pytest.raises(DuplicateError) as exc_info:
            await service.create_user(super_admin, "taken", None, Role.ADMIN)

        assert exc_info.value.code == "DUPLICATE_USERNAME"
        assert uow.rollbacks == 1

    @pytest.mark.asyncio
    async def test_admin_cannot_create_users(self, service, user_repo, admin: Actor):
        with pytest.raises(AuthorizationError) as exc_info:
            await service.create_user(admin, "someone", None, Role.MODERATOR)

        assert exc_info.value.code == "INSUFFICIENT_ROLE"
        user_repo.create.assert_not_awaited()


class TestSetBan:
    @pytest.mark.asyncio
    async def test_bans_user(self, service, user_repo, activity, super_admin: Actor, make_user):
        user_repo.get.return_value = make_user(5)
        user_repo.set_banned.return_value = True

        user = await service.set_ban(UserId(5), super_admin, True)

        assert user.banned is True
        user_repo.set_banned.assert_awaited_once_with(UserId(5), True)
        assert activity.record.await_args.args[1] is ActivityAction.USER_BANNED

    @pytest.mark.asyncio
    async def test_cannot_ban_self(self, service, user_repo, super_admin: Actor):
        with pytest.raises(AuthorizationError) as exc_info:
            await service.set_ban(super_admin.user_id, super_admin, True)

        assert exc_info.value.code == "SELF_BAN"
        user_repo.set_banned.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_already_banned(self, service, user_repo, activity, super_admin: Actor, make_user):
        user_repo.get.return_value = make_user(5, banned=True)
        user_repo.set_banned.return_value = False

        with pytest.raises(InvalidStateError) as exc_info:
            await service.set_ban(UserId(5), super_admin, True)

        assert exc_info.value.code == "ALREADY_BANNED"
        activity.record.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unban_when_not_banned(self, service, user_repo, super_admin: Actor, make_user):
        user_repo.get.return_value = make_user(5)
        user_repo.set_banned.return_value = False

        with pytest.raises(InvalidStateError) as exc_info:
            await service.set_ban(UserId(5), super_admin, False)

        assert exc_info.value.code == "NOT_BANNED"

    @pytest.mark.asyncio
    async def test_unknown_user(self, service, user_repo, super_admin: Actor):
        user_repo.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await service.set_ban(UserId(404), super_admin, True)

        assert exc_info.value.code == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_banned_super_admin_cannot_ban(self, service, user_repo):
        banned = Actor(user_id=UserId(1), role=Role.SUPER_ADMIN, banned=True)

        with pytest.raises(AuthorizationError) as exc_info:
            await service.set_ban(UserId(5), banned, True)

        assert exc_info.value.code == "BANNED"
        user_repo.get.assert_not_awaited()


class TestPermissions:
    @pytest.mark.asyncio
    async def test_empty_update_rejected(self, service, permission_repo, super_admin: Actor):
        with pytest.raises(ValidationError) as exc_info:
            await service.set_permissions(UserId(5), super_admin, PermissionUpdate())

        assert exc_info.value.code == "NO_UPDATES"
        permission_repo.apply.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_applies_partial_update(
        self, service, user_repo, permission_repo, activity, super_admin: Actor, make_user
    ):
        user_repo.get.return_value = make_user(5)
        stored = PermissionSet(user_id=UserId(5), can_delete_others_ratings=True)
        permission_repo.apply.return_value = stored
        update = PermissionUpdate(can_delete_others_ratings=True)

        result = await service.set_permissions(UserId(5), super_admin, update)

        assert result is stored
        permission_repo.apply.assert_awaited_once_with(UserId(5), update)
        assert activity.record.await_args.kwargs["details"] == {
            "can_delete_others_ratings": True
        }

    @pytest.mark.asyncio
    async def test_user_reads_own_defaults(
        self, service, user_repo, permission_repo, moderator: Actor, make_user
    ):
        user_repo.get.return_value = make_user(moderator.user_id)
        permission_repo.get.return_value = None

        result = await service.get_permissions(moderator.user_id, moderator)

        assert result == PermissionSet.defaults(moderator.user_id)

    @pytest.mark.asyncio
    async def test_user_cannot_read_others(self, service, moderator: Actor):
        with pytest.raises(AuthorizationError):
            await service.get_permissions(UserId(99), moderator)


class TestAwards:
    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, service, super_admin: Actor):
        with pytest.raises(ValidationError) as exc_info:
            await service.create_award(super_admin, "   ")

        assert exc_info.value.code == "INVALID_NAME"

    @pytest.mark.asyncio
    async def test_assign_unknown_award(self, service, award_repo, super_admin: Actor):
        award_repo.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await service.assign_award(AwardId(3), UserId(5), super_admin)

        assert exc_info.value.code == "AWARD_NOT_FOUND"
        award_repo.assign.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_assign_twice(
        self, service, award_repo, user_repo, super_admin: Actor, make_user
    ):
        award_repo.get.return_value = Award(
            id=AwardId(3), name="Golden Ear", created_at=datetime.now(UTC)
        )
        user_repo.get.return_value = make_user(5)
        award_repo.assign.return_value = None

        with pytest.raises(DuplicateError) as exc_info:
            await service.assign_award(AwardId(3), UserId(5), super_admin)

        assert exc_info.value.code == "AWARD_ALREADY_ASSIGNED"

    @pytest.mark.asyncio
    async def test_assign_records_assigner(
        self, service, award_repo, user_repo, super_admin: Actor, make_user
    ):
        award_repo.get.return_value = Award(
            id=AwardId(3), name="Golden Ear", created_at=datetime.now(UTC)
        )
        user_repo.get.return_value = make_user(5)
        award_repo.assign.return_value = UserAward(
            id=1,
            award_id=AwardId(3),
            user_id=UserId(5),
            assigned_by=super_admin.user_id,
            assigned_at=datetime.now(UTC),
        )

        grant = await service.assign_award(AwardId(3), UserId(5), super_admin)

        assert grant.assigned_by == super_admin.user_id
        award_repo.assign.assert_awaited_once_with(AwardId(3), UserId(5), super_admin.user_id)

    @pytest.mark.asyncio
    async def test_revoke_missing(self, service, award_repo, super_admin: Actor):
        award_repo.revoke.return_value = False

        with pytest.raises(NotFoundError) as exc_info:
            await service.revoke_award(AwardId(3), UserId(5), super_admin)

        assert exc_info.value.code == "AWARD_NOT_ASSIGNED"


def _golden_ear(**overrides) -> Award:
    fields = {"id": AwardId(3), "name": "Golden Ear", "created_at": datetime.now(UTC)}
    return Award(**{**fields, **overrides})


class TestAwardCatalogue:
    @pytest.mark.asyncio
    async def test_list_caps_page_size(self, service, award_repo):
        award_repo.list_all.return_value = [_golden_ear()]

        awards = await service.list_awards(limit=500, offset=-3)

        assert [a.name for a in awards] == ["Golden Ear"]
        award_repo.list_all.assert_awaited_once_with(100, 0)

    @pytest.mark.asyncio
    async def test_get_unknown(self, service, award_repo):
        award_repo.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_award(AwardId(3))

        assert exc_info.value.code == "AWARD_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_trims_name_and_records(
        self, service, award_repo, activity, uow, super_admin: Actor
    ):
        award_repo.get.return_value = _golden_ear()
        award_repo.update.return_value = _golden_ear(name="Platinum Ear")

        award = await service.update_award(
            AwardId(3), super_admin, AwardUpdate(name="  Platinum Ear ")
        )

        assert award.name == "Platinum Ear"
        award_repo.update.assert_awaited_once_with(AwardId(3), {"name": "Platinum Ear"})
        assert uow.commits == 1
        call = activity.record.await_args
        assert call.args[1] is ActivityAction.AWARD_UPDATED
        assert call.kwargs["details"] == {"name": "Platinum Ear"}

    @pytest.mark.asyncio
    async def test_update_can_clear_description(self, service, award_repo, super_admin: Actor):
        award_repo.get.return_value = _golden_ear(description="Hundred ratings")
        award_repo.update.return_value = _golden_ear()

        await service.update_award(AwardId(3), super_admin, AwardUpdate(description=None))

        award_repo.update.assert_awaited_once_with(AwardId(3), {"description": None})

    @pytest.mark.asyncio
    async def test_update_name_clash(
        self, service, award_repo, activity, uow, super_admin: Actor
    ):
        award_repo.get.return_value = _golden_ear()
        award_repo.update.return_value = None

        with pytest.raises(DuplicateError) as exc_info:
            await service.update_award(AwardId(3), super_admin, AwardUpdate(name="Taken"))

        assert exc_info.value.code == "DUPLICATE_AWARD"
        assert uow.rollbacks == 1
        activity.record.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_without_fields(self, service, award_repo, super_admin: Actor):
        with pytest.raises(ValidationError) as exc_info:
            await service.update_award(AwardId(3), super_admin, AwardUpdate())

        assert exc_info.value.code == "NO_UPDATES"
        award_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_short_name(self, service, award_repo, super_admin: Actor):
        with pytest.raises(ValidationError) as exc_info:
            await service.update_award(AwardId(3), super_admin, AwardUpdate(name=" X "))

        assert exc_info.value.field == "name"
        award_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_admin_cannot_edit_awards(self, service, award_repo, admin: Actor):
        with pytest.raises(AuthorizationError):
            await service.update_award(AwardId(3), admin, AwardUpdate(name="Nope"))
        with pytest.raises(AuthorizationError):
            await service.delete_award(AwardId(3), admin)

        award_repo.update.assert_not_awaited()
        award_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_records_name(
        self, service, award_repo, activity, super_admin: Actor
    ):
        award_repo.get.return_value = _golden_ear()
        award_repo.delete.return_value = True

        await service.delete_award(AwardId(3), super_admin)

        award_repo.delete.assert_awaited_once_with(AwardId(3))
        call = activity.record.await_args
        assert call.args[1] is ActivityAction.AWARD_DELETED
        assert call.kwargs["details"] == {"name": "Golden Ear"}

    @pytest.mark.asyncio
    async def test_delete_unknown(self, service, award_repo, super_admin: Actor):
        award_repo.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await service.delete_award(AwardId(3), super_admin)

        assert exc_info.value.code == "AWARD_NOT_FOUND"
        award_repo.delete.assert_not_awaited()


class TestActivityView:
    @pytest.mark.asyncio
    async def test_admin_cannot_view_activity(self, service, admin: Actor):
        with pytest.raises(AuthorizationError):
            await service.list_activity(admin, ActivityFilter())

    @pytest.mark.asyncio
    async def test_super_admin_reads_through_reader(self, service, super_admin: Actor):
        service.activity_reader.list.return_value = []
        flt = ActivityFilter(actor_id="user:3", limit=10)

        assert await service.list_activity(super_admin, flt) == []
        service.activity_reader.list.assert_awaited_once_with(flt)
