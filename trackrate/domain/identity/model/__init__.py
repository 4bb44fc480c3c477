"""Identity domain models."""

from .actor import Actor, SessionContext
from .engager import Engager
from .guest import GuestIdentity
from .role import Role
from .user import User
from .value import GuestId, UserId

__all__ = [
    "Actor",
    "Engager",
    "GuestId",
    "GuestIdentity",
    "Role",
    "SessionContext",
    "User",
    "UserId",
]
