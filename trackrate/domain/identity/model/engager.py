"""Engager - the identity behind a like or comment."""

from dataclasses import dataclass

from trackrate.domain.identity.model.value import GuestId, UserId
from trackrate.domain.shared.error import IdentityConflictError


@dataclass(frozen=True)
class Engager:
    """Exactly one of a registered user or a guest.

    Constructing an Engager with both or neither reference is allowed so the
    caller can surface the conflict; `ensure_exclusive()` enforces the rule.
    """

    user_id: UserId | None = None
    guest_id: GuestId | None = None

    @classmethod
    def for_user(cls, user_id: UserId) -> "Engager":
        return cls(user_id=user_id)

    @classmethod
    def for_guest(cls, guest_id: GuestId) -> "Engager":
        return cls(guest_id=guest_id)

    def ensure_exclusive(self) -> None:
        if (self.user_id is None) == (self.guest_id is None):
            raise IdentityConflictError()

    @property
    def ref(self) -> str:
        """Stable actor reference for activity events (e.g. "user:3", "guest:7")."""
        if self.user_id is not None:
            return f"user:{self.user_id}"
        return f"guest:{self.guest_id}"
