"""User aggregate for the identity domain."""

from datetime import datetime

from trackrate.domain.identity.model.actor import Actor
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.shared.model.aggregate import Aggregate


class User(Aggregate):
    """A registered staff user.

    Created by the administration workflow. This core only touches the ban flag,
    the role, and the running counters.

    Invariants:
    - `tracks_rated_count` equals the number of live ratings by this user
    - `username` is globally unique
    """

    id: UserId
    username: str
    display_name: str | None = None
    role: Role
    banned: bool = False
    tracks_rated_count: int = 0
    tracks_added_count: int = 0
    created_at: datetime
    updated_at: datetime

    def to_actor(self) -> Actor:
        """Project the stored row onto the trusted per-request Actor."""
        return Actor(user_id=self.id, role=self.role, banned=self.banned)

    @property
    def name(self) -> str:
        return self.display_name or self.username
