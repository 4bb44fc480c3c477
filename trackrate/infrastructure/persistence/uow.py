"""SQLAlchemy unit of work."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from trackrate.domain.shared.error import StorageUnavailableError
from trackrate.domain.shared.uow import UnitOfWork


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Commits the request session when the block succeeds, rolls back otherwise."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        try:
            yield
        except BaseException:
            await self.session.rollback()
            raise
        try:
            await self.session.commit()
        except OperationalError as e:
            await self.session.rollback()
            raise StorageUnavailableError(f"Commit failed: {e.orig}") from e
