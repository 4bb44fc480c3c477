"""Authorization decisions."""

from dataclasses import dataclass
from enum import StrEnum

from trackrate.domain.identity.model.value import UserId


class DenialReason(StrEnum):
    BANNED = "banned"
    NOT_OWNER = "not_owner"
    INSUFFICIENT_ROLE = "insufficient_role"
    INSUFFICIENT_CAPABILITY = "insufficient_capability"

    @property
    def code(self) -> str:
        return self.value.upper()


@dataclass(frozen=True)
class Ownership:
    """Who owns the target resource (None for resources without a user owner)."""

    owner_id: UserId | None

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.owner_id is not None and self.owner_id == user_id


@dataclass(frozen=True)
class Allowed:
    allowed = True


@dataclass(frozen=True)
class Denied:
    reason: DenialReason
    message: str
    allowed = False


Decision = Allowed | Denied

ALLOWED = Allowed()
