"""Repository ports for the access domain."""

from abc import abstractmethod
from typing import Protocol

from trackrate.domain.access.model.award import Award, AwardId, UserAward
from trackrate.domain.access.model.permission import PermissionSet, PermissionUpdate
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.shared.port import Port


class PermissionRepository(Port, Protocol):
    @abstractmethod
    async def get(self, user_id: UserId) -> PermissionSet | None: ...

    @abstractmethod
    async def apply(self, user_id: UserId, patch: PermissionUpdate) -> PermissionSet:
        """Create the row with defaults if absent, then apply ``patch``."""
        ...


class AwardRepository(Port, Protocol):
    @abstractmethod
    async def get(self, award_id: AwardId) -> Award | None: ...

    @abstractmethod
    async def create(self, name: str, description: str | None) -> Award | None:
        """Insert an award. Returns None when the name is already taken."""
        ...

    @abstractmethod
    async def list_all(self, limit: int, offset: int) -> list[Award]:
        """Newest first."""
        ...

    @abstractmethod
    async def update(self, award_id: AwardId, changes: dict[str, str | None]) -> Award | None:
        """Apply ``changes`` to an existing award.

        Returns None when the new name is already taken. The surrounding
        transaction must then be rolled back.
        """
        ...

    @abstractmethod
    async def delete(self, award_id: AwardId) -> bool:
        """Delete an award together with every grant of it."""
        ...

    @abstractmethod
    async def assign(
        self, award_id: AwardId, user_id: UserId, assigned_by: UserId
    ) -> UserAward | None:
        """Grant an award. Returns None when the user already holds it."""
        ...

    @abstractmethod
    async def revoke(self, award_id: AwardId, user_id: UserId) -> bool: ...

    @abstractmethod
    async def list_for_user(self, user_id: UserId) -> list[Award]: ...
