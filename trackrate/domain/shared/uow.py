"""Unit of Work port - one atomic storage transaction per mutating operation."""

from abc import abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Protocol

from trackrate.domain.shared.port import Port


class UnitOfWork(Port, Protocol):
    """Transaction boundary for a single mutating operation.

    Usage:
        async with uow.transaction():
            ...  # every repository write in here commits or rolls back together

    Commits when the block exits normally and rolls back when it raises.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]: ...
