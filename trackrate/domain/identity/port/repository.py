"""Repository ports for the identity domain."""

from abc import abstractmethod
from typing import Protocol

from trackrate.domain.identity.model.guest import GuestIdentity
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.user import User
from trackrate.domain.identity.model.value import GuestId, UserId
from trackrate.domain.shared.port import Port


class UserRepository(Port, Protocol):
    """Persistence for registered users and their running counters."""

    @abstractmethod
    async def get(self, user_id: UserId) -> User | None: ...

    @abstractmethod
    async def create(
        self,
        username: str,
        display_name: str | None,
        role: Role,
    ) -> User | None:
        """Insert a user. Returns None when the username is already taken."""
        ...

    @abstractmethod
    async def set_banned(self, user_id: UserId, banned: bool) -> bool:
        """Flip the ban flag. Returns False if it already had that value."""
        ...

    @abstractmethod
    async def set_role(self, user_id: UserId, role: Role) -> User | None: ...

    @abstractmethod
    async def adjust_rated_count(self, user_id: UserId, delta: int) -> None:
        """Add ``delta`` to the rater's tally within the current transaction."""
        ...


class GuestRepository(Port, Protocol):
    """Persistence for fingerprint-bound guest identities."""

    @abstractmethod
    async def get(self, guest_id: GuestId) -> GuestIdentity | None: ...

    @abstractmethod
    async def get_by_fingerprint(self, fingerprint: str) -> GuestIdentity | None: ...

    @abstractmethod
    async def create_if_absent(self, fingerprint: str, display_name: str) -> GuestIdentity:
        """Insert a guest, or return the row that won a concurrent insert."""
        ...

    @abstractmethod
    async def rename(self, guest_id: GuestId, display_name: str) -> GuestIdentity | None: ...
