"""PermissionSet - per-user capability flags."""

from datetime import datetime

from trackrate.domain.access.model.capability import Capability
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.shared.error import ValidationError
from trackrate.domain.shared.model.entity import Entity
from trackrate.domain.shared.model.value import ValueObject

PERMISSION_DEFAULTS: dict[Capability, bool] = {
    Capability.EDIT_OTHERS_RATINGS: False,
    Capability.DELETE_OTHERS_RATINGS: False,
    Capability.VERIFY_ARTISTS: True,
    Capability.ADD_ARTISTS: True,
    Capability.DELETE_ARTISTS: False,
}


class PermissionSet(Entity):
    """Capability overrides for one user, created lazily on first write.

    A user with no stored row behaves as `PermissionSet.defaults(user_id)`.
    """

    user_id: UserId
    can_edit_others_ratings: bool = PERMISSION_DEFAULTS[Capability.EDIT_OTHERS_RATINGS]
    can_delete_others_ratings: bool = PERMISSION_DEFAULTS[Capability.DELETE_OTHERS_RATINGS]
    can_verify_artists: bool = PERMISSION_DEFAULTS[Capability.VERIFY_ARTISTS]
    can_add_artists: bool = PERMISSION_DEFAULTS[Capability.ADD_ARTISTS]
    can_delete_artists: bool = PERMISSION_DEFAULTS[Capability.DELETE_ARTISTS]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def defaults(cls, user_id: UserId) -> "PermissionSet":
        return cls(user_id=user_id)

    def allows(self, capability: Capability) -> bool:
        if not capability.is_flag:
            return False
        return bool(getattr(self, capability.value))


class PermissionUpdate(ValueObject):
    """Partial flag update; unset fields keep their current value."""

    can_edit_others_ratings: bool | None = None
    can_delete_others_ratings: bool | None = None
    can_verify_artists: bool | None = None
    can_add_artists: bool | None = None
    can_delete_artists: bool | None = None

    def changes(self) -> dict[str, bool]:
        return self.model_dump(exclude_none=True)

    def ensure_not_empty(self) -> None:
        if not self.changes():
            raise ValidationError(
                "At least one permission field required",
                code="NO_UPDATES",
            )
