"""Activity events emitted after successful mutations."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import Field

from trackrate.domain.shared.model.value import ValueObject

MAX_ACTIVITY_PAGE = 100

# Actor reference for operator jobs run outside any user session
SYSTEM_ACTOR = "system"


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ActivityAction(StrEnum):
    """Action tags written to the activity log."""

    RATING_SUBMITTED = "rating.submitted"
    RATING_UPDATED = "rating.updated"
    RATING_DELETED = "rating.deleted"
    LIKE_ADDED = "like.added"
    LIKE_REMOVED = "like.removed"
    COMMENT_ADDED = "comment.added"
    COMMENT_DELETED = "comment.deleted"
    GUEST_RENAMED = "guest.renamed"
    USER_CREATED = "user.created"
    USER_BANNED = "user.banned"
    USER_UNBANNED = "user.unbanned"
    ROLE_CHANGED = "user.role_changed"
    PERMISSIONS_CHANGED = "user.permissions_changed"
    AWARD_CREATED = "award.created"
    AWARD_UPDATED = "award.updated"
    AWARD_DELETED = "award.deleted"
    AWARD_ASSIGNED = "award.assigned"
    AWARD_REVOKED = "award.revoked"
    COUNTERS_RECONCILED = "counters.reconciled"


class ActivityEvent(ValueObject):
    """One append-only activity record.

    `actor_id` is an actor reference such as "user:3" or "guest:7".
    """

    actor_id: str
    action: ActivityAction
    target_type: str | None = None
    target_id: int | None = None
    details: dict[str, Any] | None = None
    created_at: datetime = Field(default_factory=_utc_now)


class ActivityFilter(ValueObject):
    """Filters for the activity log read view."""

    actor_id: str | None = None
    action: ActivityAction | None = None
    since: datetime | None = None
    until: datetime | None = None
    limit: int = Field(default=50, ge=1, le=MAX_ACTIVITY_PAGE)
    offset: int = Field(default=0, ge=0)
