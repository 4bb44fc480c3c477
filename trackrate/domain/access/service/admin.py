"""AdminService - super-admin-gated user administration."""

import logging
import re

from trackrate.domain.access.model.award import Award, AwardId, AwardUpdate, UserAward
from trackrate.domain.access.model.capability import Capability
from trackrate.domain.access.model.decision import Ownership
from trackrate.domain.access.model.permission import PermissionSet, PermissionUpdate
from trackrate.domain.access.port.repository import AwardRepository, PermissionRepository
from trackrate.domain.access.service.guard import AuthorizationGuard
from trackrate.domain.activity.model.event import ActivityAction, ActivityEvent, ActivityFilter
from trackrate.domain.activity.port.recorder import ActivityReader
from trackrate.domain.activity.service.activity import ActivityLog
from trackrate.domain.identity.model.actor import Actor
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.user import User
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.identity.port.repository import UserRepository
from trackrate.domain.shared.error import (
    AuthorizationError,
    DuplicateError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from trackrate.domain.shared.service import Service
from trackrate.domain.shared.uow import UnitOfWork

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,50}$")
MAX_AWARD_PAGE = 100


def _actor_ref(actor: Actor) -> str:
    return f"user:{actor.user_id}"


def _award_name(name: str | None) -> str:
    name = name.strip() if isinstance(name, str) else ""
    if len(name) < 2:
        raise ValidationError(
            "Award name must be at least 2 characters", field="name", code="INVALID_NAME"
        )
    return name


class AdminService(Service):
    """Role, ban, permission and award management.

    Every operation authorizes the actor before touching storage and emits an
    activity event after its transaction committed.
    """

    users: UserRepository
    permissions: PermissionRepository
    awards: AwardRepository
    activity_reader: ActivityReader
    guard: AuthorizationGuard
    uow: UnitOfWork
    activity: ActivityLog

    async def _get_user(self, user_id: UserId) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}", code="USER_NOT_FOUND")
        return user

    # -- Users ---------------------------------------------------------------

    async def create_user(
        self,
        actor: Actor,
        username: str,
        display_name: str | None,
        role: Role,
    ) -> User:
        await self.guard.require(actor, Capability.MANAGE_USERS)

        if not USERNAME_PATTERN.match(username or ""):
            raise ValidationError(
                "Username must be 3-50 characters, alphanumeric and underscores only",
                field="username",
                code="INVALID_USERNAME",
            )
        display_name = display_name.strip() if display_name else None

        async with self.uow.transaction():
            user = await self.users.create(username, display_name or None, role)
            if user is None:
                raise DuplicateError(
                    f"Username already exists: {username}", code="DUPLICATE_USERNAME"
                )

        logger.info("User created: id=%s role=%s by=%s", user.id, role, actor.user_id)
        await self.activity.record(
            _actor_ref(actor),
            ActivityAction.USER_CREATED,
            target_type="user",
            target_id=user.id,
            details={"username": username, "role": role.value},
        )
        return user

    async def change_role(self, target_user_id: UserId, actor: Actor, role: Role) -> User:
        await self.guard.require(actor, Capability.MANAGE_USERS)

        async with self.uow.transaction():
            previous = await self._get_user(target_user_id)
            user = await self.users.set_role(target_user_id, role)
            if user is None:
                raise NotFoundError(
                    f"User not found: {target_user_id}", code="USER_NOT_FOUND"
                )

        await self.activity.record(
            _actor_ref(actor),
            ActivityAction.ROLE_CHANGED,
            target_type="user",
            target_id=target_user_id,
            details={"from": previous.role.value, "to": role.value},
        )
        return user

    async def set_ban(self, target_user_id: UserId, actor: Actor, banned: bool) -> User:
        await self.guard.require(actor, Capability.MANAGE_BANS)
        if target_user_id == actor.user_id:
            raise AuthorizationError(
                "Users cannot ban or unban themselves", code="SELF_BAN", reason="self_action"
            )

        async with self.uow.transaction():
            user = await self._get_user(target_user_id)
            changed = await self.users.set_banned(target_user_id, banned)
            if not changed:
                raise InvalidStateError(
                    f"User {target_user_id} is {'already' if banned else 'not'} banned",
                    code="ALREADY_BANNED" if banned else "NOT_BANNED",
                )
            user.banned = banned

        logger.info("User %s: id=%s by=%s", "banned" if banned else "unbanned", user.id, actor.user_id)
        await self.activity.record(
            _actor_ref(actor),
            ActivityAction.USER_BANNED if banned else ActivityAction.USER_UNBANNED,
            target_type="user",
            target_id=target_user_id,
        )
        return user

    # -- Permissions ---------------------------------------------------------

    async def get_permissions(self, target_user_id: UserId, actor: Actor) -> PermissionSet:
        """Effective flags for a user, defaults included. Readable by the user themself."""
        await self.guard.require(
            actor, Capability.MANAGE_PERMISSIONS, Ownership(owner_id=target_user_id)
        )
        await self._get_user(target_user_id)
        stored = await self.permissions.get(target_user_id)
        return stored or PermissionSet.defaults(target_user_id)

    async def set_permissions(
        self,
        target_user_id: UserId,
        actor: Actor,
        update: PermissionUpdate,
    ) -> PermissionSet:
        await self.guard.require(actor, Capability.MANAGE_PERMISSIONS)
        update.ensure_not_empty()

        async with self.uow.transaction():
            await self._get_user(target_user_id)
            permissions = await self.permissions.apply(target_user_id, update)

        await self.activity.record(
            _actor_ref(actor),
            ActivityAction.PERMISSIONS_CHANGED,
            target_type="user",
            target_id=target_user_id,
            details=update.changes(),
        )
        return permissions

    # -- Awards --------------------------------------------------------------

    async def _get_award(self, award_id: AwardId) -> Award:
        award = await self.awards.get(award_id)
        if award is None:
            raise NotFoundError(f"Award not found: {award_id}", code="AWARD_NOT_FOUND")
        return award

    async def list_awards(self, limit: int = 50, offset: int = 0) -> list[Award]:
        return await self.awards.list_all(min(max(limit, 1), MAX_AWARD_PAGE), max(offset, 0))

    async def get_award(self, award_id: AwardId) -> Award:
        return await self._get_award(award_id)

    async def create_award(self, actor: Actor, name: str, description: str | None = None) -> Award:
        await self.guard.require(actor, Capability.MANAGE_AWARDS)
        name = _award_name(name)

        async with self.uow.transaction():
            award = await self.awards.create(name, description)
            if award is None:
                raise DuplicateError(f"Award already exists: {name}", code="DUPLICATE_AWARD")

        await self.activity.record(
            _actor_ref(actor),
            ActivityAction.AWARD_CREATED,
            target_type="award",
            target_id=award.id,
        )
        return award

    async def update_award(self, award_id: AwardId, actor: Actor, update: AwardUpdate) -> Award:
        await self.guard.require(actor, Capability.MANAGE_AWARDS)
        update.ensure_not_empty()
        changes = update.changes()
        if "name" in changes:
            changes["name"] = _award_name(changes["name"])

        async with self.uow.transaction():
            await self._get_award(award_id)
            award = await self.awards.update(award_id, changes)
            if award is None:
                raise DuplicateError(
                    f"Award already exists: {changes['name']}", code="DUPLICATE_AWARD"
                )

        await self.activity.record(
            _actor_ref(actor),
            ActivityAction.AWARD_UPDATED,
            target_type="award",
            target_id=award_id,
            details=changes,
        )
        return award

    async def delete_award(self, award_id: AwardId, actor: Actor) -> None:
        """Delete an award. Every user holding it loses it."""
        await self.guard.require(actor, Capability.MANAGE_AWARDS)

        async with self.uow.transaction():
            award = await self._get_award(award_id)
            if not await self.awards.delete(award_id):
                raise NotFoundError(f"Award not found: {award_id}", code="AWARD_NOT_FOUND")

        logger.info("Award deleted: id=%s name=%s by=%s", award_id, award.name, actor.user_id)
        await self.activity.record(
            _actor_ref(actor),
            ActivityAction.AWARD_DELETED,
            target_type="award",
            target_id=award_id,
            details={"name": award.name},
        )

    async def assign_award(
        self, award_id: AwardId, target_user_id: UserId, actor: Actor
    ) -> UserAward:
        await self.guard.require(actor, Capability.MANAGE_AWARDS)

        async with self.uow.transaction():
            await self._get_award(award_id)
            await self._get_user(target_user_id)
            grant = await self.awards.assign(award_id, target_user_id, actor.user_id)
            if grant is None:
                raise DuplicateError(
                    "User already has this award", code="AWARD_ALREADY_ASSIGNED"
                )

        await self.activity.record(
            _actor_ref(actor),
            ActivityAction.AWARD_ASSIGNED,
            target_type="award",
            target_id=award_id,
            details={"user_id": target_user_id},
        )
        return grant

    async def revoke_award(self, award_id: AwardId, target_user_id: UserId, actor: Actor) -> None:
        await self.guard.require(actor, Capability.MANAGE_AWARDS)

        async with self.uow.transaction():
            if not await self.awards.revoke(award_id, target_user_id):
                raise NotFoundError(
                    "User does not have this award", code="AWARD_NOT_ASSIGNED"
                )

        await self.activity.record(
            _actor_ref(actor),
            ActivityAction.AWARD_REVOKED,
            target_type="award",
            target_id=award_id,
            details={"user_id": target_user_id},
        )

    async def list_user_awards(self, user_id: UserId) -> list[Award]:
        return await self.awards.list_for_user(user_id)

    # -- Activity ------------------------------------------------------------

    async def list_activity(self, actor: Actor, filter: ActivityFilter) -> list[ActivityEvent]:
        await self.guard.require(actor, Capability.VIEW_ACTIVITY)
        return await self.activity_reader.list(filter)
