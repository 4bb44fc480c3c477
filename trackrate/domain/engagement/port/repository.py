"""Repository ports for the engagement domain."""

from abc import abstractmethod
from typing import Protocol

from trackrate.domain.catalog.model.value import EntityType, TrackId
from trackrate.domain.engagement.model.comment import Comment, CommentId, CommentView
from trackrate.domain.engagement.model.like import Like
from trackrate.domain.identity.model.engager import Engager
from trackrate.domain.shared.port import Port


class LikeRepository(Port, Protocol):
    @abstractmethod
    async def add(self, entity_type: EntityType, entity_id: int, engager: Engager) -> Like | None:
        """Insert a like in one atomic statement.

        Returns None when the engager already likes the entity.
        """
        ...

    @abstractmethod
    async def remove(self, entity_type: EntityType, entity_id: int, engager: Engager) -> bool: ...

    @abstractmethod
    async def count(self, entity_type: EntityType, entity_id: int) -> int: ...

    @abstractmethod
    async def exists(self, entity_type: EntityType, entity_id: int, engager: Engager) -> bool: ...


class CommentRepository(Port, Protocol):
    @abstractmethod
    async def add(self, track_id: TrackId, engager: Engager, body: str) -> Comment: ...

    @abstractmethod
    async def get(self, comment_id: CommentId) -> Comment | None: ...

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> bool: ...

    @abstractmethod
    async def list_for_track(self, track_id: TrackId) -> list[CommentView]:
        """Comments on a track, newest first."""
        ...
