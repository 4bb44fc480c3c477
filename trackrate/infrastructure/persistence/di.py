from typing import AsyncIterable

from dishka import Provider, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from trackrate.config import Config
from trackrate.domain.access.port.repository import AwardRepository, PermissionRepository
from trackrate.domain.activity.port.recorder import ActivityReader, ActivityRecorder
from trackrate.domain.catalog.port.reader import CatalogReader
from trackrate.domain.engagement.port.repository import CommentRepository, LikeRepository
from trackrate.domain.identity.port.repository import GuestRepository, UserRepository
from trackrate.domain.rating.port.repository import RatingRepository
from trackrate.domain.shared.uow import UnitOfWork
from trackrate.infrastructure.persistence.adapter.activity import (
    LoggingActivityRecorder,
    SQLAlchemyActivityReader,
    SQLAlchemyActivityRecorder,
)
from trackrate.infrastructure.persistence.adapter.catalog import SQLAlchemyCatalogReader
from trackrate.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from trackrate.infrastructure.persistence.repository.access import (
    SQLAlchemyAwardRepository,
    SQLAlchemyPermissionRepository,
)
from trackrate.infrastructure.persistence.repository.engagement import (
    SQLAlchemyCommentRepository,
    SQLAlchemyLikeRepository,
)
from trackrate.infrastructure.persistence.repository.identity import (
    SQLAlchemyGuestRepository,
    SQLAlchemyUserRepository,
)
from trackrate.infrastructure.persistence.repository.rating import (
    SQLAlchemyRatingRepository,
)
from trackrate.infrastructure.persistence.uow import SQLAlchemyUnitOfWork
from trackrate.util.di.scope import Scope


class PersistenceProvider(Provider):
    # APP-scoped factories
    @provide(scope=Scope.APP)
    def get_engine(self, config: Config) -> AsyncEngine:
        return create_db_engine(config)

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session; services commit through UnitOfWork.transaction()
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session

    uow = provide(SQLAlchemyUnitOfWork, scope=Scope.UOW, provides=UnitOfWork)

    # UOW-scoped repositories
    user_repo = provide(SQLAlchemyUserRepository, scope=Scope.UOW, provides=UserRepository)
    guest_repo = provide(SQLAlchemyGuestRepository, scope=Scope.UOW, provides=GuestRepository)
    permission_repo = provide(
        SQLAlchemyPermissionRepository, scope=Scope.UOW, provides=PermissionRepository
    )
    award_repo = provide(SQLAlchemyAwardRepository, scope=Scope.UOW, provides=AwardRepository)
    like_repo = provide(SQLAlchemyLikeRepository, scope=Scope.UOW, provides=LikeRepository)
    comment_repo = provide(
        SQLAlchemyCommentRepository, scope=Scope.UOW, provides=CommentRepository
    )
    rating_repo = provide(SQLAlchemyRatingRepository, scope=Scope.UOW, provides=RatingRepository)

    # Cross-domain readers
    catalog_reader = provide(SQLAlchemyCatalogReader, scope=Scope.UOW, provides=CatalogReader)
    activity_reader = provide(
        SQLAlchemyActivityReader, scope=Scope.UOW, provides=ActivityReader
    )

    @provide(scope=Scope.APP)
    def get_activity_recorder(
        self,
        config: Config,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> ActivityRecorder:
        """SQL sink with its own sessions, or log-only when disabled."""
        if not config.activity.enabled:
            return LoggingActivityRecorder()
        return SQLAlchemyActivityRecorder(session_factory)
