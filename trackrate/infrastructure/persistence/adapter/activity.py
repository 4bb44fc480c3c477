"""Activity log adapters."""

import logging

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from trackrate.domain.activity.model.event import ActivityAction, ActivityEvent, ActivityFilter
from trackrate.domain.activity.port.recorder import ActivityReader, ActivityRecorder
from trackrate.infrastructure.persistence.tables import activity_logs_table

logger = logging.getLogger(__name__)


def _row_to_event(row: dict) -> ActivityEvent:
    return ActivityEvent(
        actor_id=row["actor_id"],
        action=ActivityAction(row["action"]),
        target_type=row["target_type"],
        target_id=row["target_id"],
        details=row["details"],
        created_at=row["created_at"],
    )


class SQLAlchemyActivityRecorder(ActivityRecorder):
    """Writes each event in its own short session, independent of the request's."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def record(self, event: ActivityEvent) -> None:
        async with self._session_factory() as session:
            await session.execute(
                insert(activity_logs_table).values(
                    actor_id=event.actor_id,
                    action=event.action.value,
                    target_type=event.target_type,
                    target_id=event.target_id,
                    details=event.details,
                    created_at=event.created_at,
                )
            )
            await session.commit()


class LoggingActivityRecorder(ActivityRecorder):
    """Used when the SQL sink is disabled: events only reach the log."""

    async def record(self, event: ActivityEvent) -> None:
        logger.info(
            "activity actor=%s action=%s target=%s:%s",
            event.actor_id,
            event.action,
            event.target_type,
            event.target_id,
        )


class SQLAlchemyActivityReader(ActivityReader):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list(self, filter: ActivityFilter) -> list[ActivityEvent]:
        t = activity_logs_table
        stmt = select(t)
        if filter.actor_id is not None:
            stmt = stmt.where(t.c.actor_id == filter.actor_id)
        if filter.action is not None:
            stmt = stmt.where(t.c.action == filter.action.value)
        if filter.since is not None:
            stmt = stmt.where(t.c.created_at >= filter.since)
        if filter.until is not None:
            stmt = stmt.where(t.c.created_at < filter.until)
        stmt = stmt.order_by(t.c.created_at.desc(), t.c.id.desc())
        stmt = stmt.limit(filter.limit).offset(filter.offset)

        result = await self.session.execute(stmt)
        return [_row_to_event(dict(row)) for row in result.mappings()]
