"""Awards granted to users by super admins."""

from datetime import datetime
from typing import NewType

from trackrate.domain.identity.model.value import UserId
from trackrate.domain.shared.error import ValidationError
from trackrate.domain.shared.model.entity import Entity
from trackrate.domain.shared.model.value import ValueObject

AwardId = NewType("AwardId", int)


class Award(Entity):
    id: AwardId
    name: str
    description: str | None = None
    created_at: datetime


class UserAward(Entity):
    """One (award, user) grant. The pair is unique."""

    id: int
    award_id: AwardId
    user_id: UserId
    assigned_by: UserId
    assigned_at: datetime


class AwardUpdate(ValueObject):
    """Partial award edit. Only fields present in the request are applied."""

    name: str | None = None
    description: str | None = None

    def changes(self) -> dict[str, str | None]:
        return self.model_dump(exclude_unset=True)

    def ensure_not_empty(self) -> None:
        if not self.changes():
            raise ValidationError("At least one award field required", code="NO_UPDATES")
