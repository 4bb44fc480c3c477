"""Comments on tracks."""

from datetime import datetime
from typing import NewType

from trackrate.domain.catalog.model.value import TrackId
from trackrate.domain.identity.model.engager import Engager
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.value import GuestId, UserId
from trackrate.domain.shared.error import ValidationError
from trackrate.domain.shared.model.entity import Entity
from trackrate.domain.shared.model.value import ValueObject

CommentId = NewType("CommentId", int)


class Comment(Entity):
    id: CommentId
    track_id: TrackId
    user_id: UserId | None = None
    guest_id: GuestId | None = None
    body: str
    created_at: datetime
    updated_at: datetime

    @property
    def engager(self) -> Engager:
        return Engager(user_id=self.user_id, guest_id=self.guest_id)

    def is_authored_by(self, engager: Engager) -> bool:
        if engager.user_id is not None:
            return self.user_id == engager.user_id
        return engager.guest_id is not None and self.guest_id == engager.guest_id


class CommentView(ValueObject):
    """A comment joined with its author's current display name."""

    id: CommentId
    track_id: TrackId
    user_id: UserId | None = None
    guest_id: GuestId | None = None
    body: str
    display_name: str | None = None
    role: Role | None = None
    created_at: datetime
    updated_at: datetime


def normalize_body(body: str | None) -> str:
    if not isinstance(body, str) or not body.strip():
        raise ValidationError("Comment is required", field="body", code="MISSING_COMMENT")
    return body.strip()
