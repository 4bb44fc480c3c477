"""ActivityLog - best-effort emission of activity events."""

import logging
from typing import Any

from trackrate.domain.activity.model.event import ActivityAction, ActivityEvent
from trackrate.domain.activity.port.recorder import ActivityRecorder
from trackrate.domain.shared.service import Service

logger = logging.getLogger(__name__)


class ActivityLog(Service):
    """Forwards events to the recorder after the primary mutation committed.

    A recorder failure is logged and dropped: it never rolls back or blocks the
    mutation it follows.
    """

    recorder: ActivityRecorder

    async def record(
        self,
        actor_id: str,
        action: ActivityAction,
        target_type: str | None = None,
        target_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        event = ActivityEvent(
            actor_id=actor_id,
            action=action,
            target_type=target_type,
            target_id=target_id,
            details=details,
        )
        try:
            await self.recorder.record(event)
        except Exception:
            logger.exception(
                "Activity recording failed: actor=%s action=%s target=%s:%s",
                actor_id,
                action,
                target_type,
                target_id,
            )
