"""Unit tests for AuthorizationGuard."""

from unittest.mock import AsyncMock

import pytest

from trackrate.domain.access.model.capability import Capability
from trackrate.domain.access.model.decision import Denied, Ownership
from trackrate.domain.access.model.permission import PermissionSet
from trackrate.domain.access.service.guard import AuthorizationGuard
from trackrate.domain.identity.model.actor import Actor
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.shared.error import AuthorizationError


class TestAuthorizationGuard:
    @pytest.mark.asyncio
    async def test_flag_capability_loads_permissions(self, permission_repo: AsyncMock, admin: Actor):
        permission_repo.get.return_value = PermissionSet(
            user_id=admin.user_id, can_edit_others_ratings=True
        )
        guard = AuthorizationGuard(permissions=permission_repo)

        decision = await guard.authorize(
            admin, Capability.EDIT_OTHERS_RATINGS, Ownership(UserId(50))
        )

        assert decision.allowed
        permission_repo.get.assert_awaited_once_with(admin.user_id)

    @pytest.mark.asyncio
    async def test_role_capability_skips_permission_lookup(
        self, permission_repo: AsyncMock, moderator: Actor
    ):
        guard = AuthorizationGuard(permissions=permission_repo)

        decision = await guard.authorize(moderator, Capability.MODERATE_COMMENTS)

        assert decision.allowed
        permission_repo.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_banned_actor_skips_permission_lookup(self, permission_repo: AsyncMock):
        guard = AuthorizationGuard(permissions=permission_repo)
        banned = Actor(user_id=UserId(4), role=Role.ADMIN, banned=True)

        decision = await guard.authorize(banned, Capability.VERIFY_ARTISTS)

        assert isinstance(decision, Denied)
        permission_repo.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_require_raises_with_reason(self, permission_repo: AsyncMock, admin: Actor):
        guard = AuthorizationGuard(permissions=permission_repo)

        with pytest.raises(AuthorizationError) as exc_info:
            await guard.require(admin, Capability.MANAGE_BANS)

        assert exc_info.value.code == "INSUFFICIENT_ROLE"
        assert exc_info.value.reason == "insufficient_role"

    @pytest.mark.asyncio
    async def test_require_returns_none_when_allowed(
        self, permission_repo: AsyncMock, super_admin: Actor
    ):
        guard = AuthorizationGuard(permissions=permission_repo)

        assert await guard.require(super_admin, Capability.MANAGE_BANS) is None
