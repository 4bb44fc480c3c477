"""Likes on catalog entities."""

from datetime import datetime

from pydantic import model_validator

from trackrate.domain.catalog.model.value import EntityType
from trackrate.domain.identity.model.engager import Engager
from trackrate.domain.identity.model.value import GuestId, UserId
from trackrate.domain.shared.model.entity import Entity
from trackrate.domain.shared.model.value import ValueObject


class Like(Entity):
    """One like of an entity by exactly one user or guest.

    (entity_type, entity_id, user_id) and (entity_type, entity_id, guest_id)
    are unique in storage.
    """

    id: int
    entity_type: EntityType
    entity_id: int
    user_id: UserId | None = None
    guest_id: GuestId | None = None
    created_at: datetime

    @model_validator(mode="after")
    def _one_identity(self) -> "Like":
        self.engager.ensure_exclusive()
        return self

    @property
    def engager(self) -> Engager:
        return Engager(user_id=self.user_id, guest_id=self.guest_id)


class LikeResult(ValueObject):
    """Total like count observed in the same transaction as the mutation."""

    total_likes: int


class LikeStatus(ValueObject):
    total_likes: int
    liked: bool = False
