"""EngagementLedger - likes and comments with one identity per row."""

import logging

from trackrate.domain.access.model.capability import Capability
from trackrate.domain.access.model.decision import Ownership
from trackrate.domain.access.service.guard import AuthorizationGuard
from trackrate.domain.activity.model.event import ActivityAction
from trackrate.domain.activity.service.activity import ActivityLog
from trackrate.domain.catalog.model.value import EntityType, TrackId
from trackrate.domain.catalog.port.reader import CatalogReader
from trackrate.domain.engagement.model.comment import (
    Comment,
    CommentId,
    CommentView,
    normalize_body,
)
from trackrate.domain.engagement.model.like import LikeResult, LikeStatus
from trackrate.domain.engagement.port.repository import CommentRepository, LikeRepository
from trackrate.domain.identity.model.engager import Engager
from trackrate.domain.identity.port.repository import GuestRepository, UserRepository
from trackrate.domain.shared.error import (
    AuthorizationError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from trackrate.domain.shared.service import Service
from trackrate.domain.shared.uow import UnitOfWork

logger = logging.getLogger(__name__)


class EngagementLedger(Service):
    """Likes and comments.

    Uniqueness of a like per (entity, identity) is enforced by storage
    constraints; the ledger never checks for an existing like before inserting.
    Counts returned from like/unlike are read inside the mutating transaction.
    """

    likes: LikeRepository
    comments: CommentRepository
    catalog: CatalogReader
    users: UserRepository
    guests: GuestRepository
    guard: AuthorizationGuard
    uow: UnitOfWork
    activity: ActivityLog

    async def _check_engager(self, engager: Engager) -> None:
        """The engager must exist, and a registered user must not be banned."""
        engager.ensure_exclusive()
        if engager.user_id is not None:
            user = await self.users.get(engager.user_id)
            if user is None:
                raise NotFoundError(
                    f"User not found: {engager.user_id}", code="USER_NOT_FOUND"
                )
            await self.guard.require(user.to_actor(), Capability.ENGAGE)
        elif await self.guests.get(engager.guest_id) is None:
            raise NotFoundError(
                f"Guest not found: {engager.guest_id}", code="GUEST_NOT_FOUND"
            )

    async def _require_entity(self, entity_type: EntityType, entity_id: int) -> None:
        if not await self.catalog.exists(entity_type, entity_id):
            raise NotFoundError(
                f"{entity_type.value.capitalize()} not found: {entity_id}",
                code=entity_type.not_found_code,
            )

    # -- Likes ---------------------------------------------------------------

    async def like(self, entity_type: EntityType, entity_id: int, engager: Engager) -> LikeResult:
        await self._check_engager(engager)
        await self._require_entity(entity_type, entity_id)

        async with self.uow.transaction():
            like = await self.likes.add(entity_type, entity_id, engager)
            if like is None:
                raise DuplicateError(
                    f"Already liked this {entity_type.value}", code="ALREADY_LIKED"
                )
            total = await self.likes.count(entity_type, entity_id)

        await self.activity.record(
            engager.ref,
            ActivityAction.LIKE_ADDED,
            target_type=entity_type.value,
            target_id=entity_id,
        )
        return LikeResult(total_likes=total)

    async def unlike(
        self, entity_type: EntityType, entity_id: int, engager: Engager
    ) -> LikeResult:
        await self._check_engager(engager)
        await self._require_entity(entity_type, entity_id)

        async with self.uow.transaction():
            if not await self.likes.remove(entity_type, entity_id, engager):
                raise NotFoundError("Like not found", code="LIKE_NOT_FOUND")
            total = await self.likes.count(entity_type, entity_id)

        await self.activity.record(
            engager.ref,
            ActivityAction.LIKE_REMOVED,
            target_type=entity_type.value,
            target_id=entity_id,
        )
        return LikeResult(total_likes=total)

    async def like_status(
        self,
        entity_type: EntityType,
        entity_id: int,
        engager: Engager | None = None,
    ) -> LikeStatus:
        await self._require_entity(entity_type, entity_id)
        total = await self.likes.count(entity_type, entity_id)
        liked = False
        if engager is not None:
            engager.ensure_exclusive()
            liked = await self.likes.exists(entity_type, entity_id, engager)
        return LikeStatus(total_likes=total, liked=liked)

    # -- Comments ------------------------------------------------------------

    async def post_comment(self, track_id: TrackId, engager: Engager, body: str | None) -> Comment:
        body = normalize_body(body)
        await self._check_engager(engager)
        await self._require_entity(EntityType.TRACK, track_id)

        async with self.uow.transaction():
            comment = await self.comments.add(track_id, engager, body)

        await self.activity.record(
            engager.ref,
            ActivityAction.COMMENT_ADDED,
            target_type="comment",
            target_id=comment.id,
            details={"track_id": track_id},
        )
        return comment

    async def list_comments(self, track_id: TrackId) -> list[CommentView]:
        await self._require_entity(EntityType.TRACK, track_id)
        return await self.comments.list_for_track(track_id)

    async def delete_comment(
        self,
        comment_id: CommentId,
        engager: Engager,
        track_id: TrackId | None = None,
    ) -> None:
        """Delete a comment as its author or as staff.

        Guests can only delete their own comments. Registered users go through
        the guard, which lets owners and moderation roles through.
        """
        engager.ensure_exclusive()
        comment = await self.comments.get(comment_id)
        if comment is None:
            raise NotFoundError(f"Comment not found: {comment_id}", code="COMMENT_NOT_FOUND")
        if track_id is not None and comment.track_id != track_id:
            raise ValidationError(
                "Comment does not belong to this track",
                field="track_id",
                code="TRACK_MISMATCH",
            )

        if engager.user_id is not None:
            user = await self.users.get(engager.user_id)
            if user is None:
                raise NotFoundError(
                    f"User not found: {engager.user_id}", code="USER_NOT_FOUND"
                )
            await self.guard.require(
                user.to_actor(),
                Capability.MODERATE_COMMENTS,
                Ownership(owner_id=comment.user_id),
            )
        elif not comment.is_authored_by(engager):
            raise AuthorizationError(
                "Access denied: guests can only delete their own comments",
                code="NOT_OWNER",
                reason="not_owner",
            )

        async with self.uow.transaction():
            if not await self.comments.delete(comment_id):
                raise NotFoundError(
                    f"Comment not found: {comment_id}", code="COMMENT_NOT_FOUND"
                )

        logger.info("Comment deleted: id=%s by=%s", comment_id, engager.ref)
        await self.activity.record(
            engager.ref,
            ActivityAction.COMMENT_DELETED,
            target_type="comment",
            target_id=comment_id,
            details={"track_id": comment.track_id},
        )
