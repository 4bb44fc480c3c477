"""Read-only view of the externally maintained catalog."""

from abc import abstractmethod
from typing import Protocol

from trackrate.domain.catalog.model.value import EntityType
from trackrate.domain.shared.port import Port


class CatalogReader(Port, Protocol):
    @abstractmethod
    async def exists(self, entity_type: EntityType, entity_id: int) -> bool: ...

