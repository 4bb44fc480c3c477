"""Actor - the authenticated party performing an action."""

from dataclasses import dataclass

from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.value import UserId


@dataclass(frozen=True)
class Actor:
    """Authenticated requester, resolved server-side from a verified session.

    Built from the stored user row, never from client-supplied claims.
    Immutable for the lifetime of a request.
    """

    user_id: UserId
    role: Role
    banned: bool = False

    @property
    def is_super_admin(self) -> bool:
        return self.role is Role.SUPER_ADMIN


@dataclass(frozen=True)
class SessionContext:
    """What the session layer established about the current request.

    ``actor`` is set for a verified bearer session; ``fingerprint`` carries the
    raw guest fingerprint header when the client sent one.
    """

    actor: Actor | None = None
    fingerprint: str | None = None
