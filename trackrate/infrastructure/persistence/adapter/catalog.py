"""Catalog reader over the artists and tracks tables."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trackrate.domain.catalog.model.value import EntityType
from trackrate.domain.catalog.port.reader import CatalogReader
from trackrate.infrastructure.persistence.tables import artists_table, tracks_table

_TABLES = {
    EntityType.ARTIST: artists_table,
    EntityType.TRACK: tracks_table,
}


class SQLAlchemyCatalogReader(CatalogReader):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def exists(self, entity_type: EntityType, entity_id: int) -> bool:
        table = _TABLES[entity_type]
        result = await self.session.execute(select(table.c.id).where(table.c.id == entity_id))
        return result.first() is not None

