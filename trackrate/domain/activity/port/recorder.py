"""Ports for the external activity log."""

from abc import abstractmethod
from typing import Protocol

from trackrate.domain.activity.model.event import ActivityEvent, ActivityFilter
from trackrate.domain.shared.port import Port


class ActivityRecorder(Port, Protocol):
    """Append-only sink. Implementations may fail; callers must not depend on it."""

    @abstractmethod
    async def record(self, event: ActivityEvent) -> None: ...


class ActivityReader(Port, Protocol):
    @abstractmethod
    async def list(self, filter: ActivityFilter) -> list[ActivityEvent]: ...
