"""Shared fixtures for unit tests."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from trackrate.domain.activity.service.activity import ActivityLog
from trackrate.domain.identity.model.actor import Actor
from trackrate.domain.identity.model.guest import GuestIdentity
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.user import User
from trackrate.domain.identity.model.value import GuestId, UserId


class FakeUnitOfWork:
    """Counts commits and rollbacks instead of touching storage."""

    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        try:
            yield
        except Exception:
            self.rollbacks += 1
            raise
        self.commits += 1


def _build_user(
    user_id: int = 1,
    role: Role = Role.MODERATOR,
    banned: bool = False,
    username: str | None = None,
) -> User:
    now = datetime.now(UTC)
    return User(
        id=UserId(user_id),
        username=username or f"user{user_id}",
        role=role,
        banned=banned,
        created_at=now,
        updated_at=now,
    )


def _build_guest(
    guest_id: int = 7,
    fingerprint: str = "fp-abc",
    display_name: str = "Guesty",
) -> GuestIdentity:
    now = datetime.now(UTC)
    return GuestIdentity(
        id=GuestId(guest_id),
        fingerprint=fingerprint,
        display_name=display_name,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def activity() -> ActivityLog:
    """Mock ActivityLog capturing recorded events."""
    log = MagicMock(spec=ActivityLog)
    log.record = AsyncMock()
    return log


@pytest.fixture
def permission_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get.return_value = None
    return repo


@pytest.fixture
def super_admin() -> Actor:
    return Actor(user_id=UserId(1), role=Role.SUPER_ADMIN)


@pytest.fixture
def admin() -> Actor:
    return Actor(user_id=UserId(2), role=Role.ADMIN)


@pytest.fixture
def moderator() -> Actor:
    return Actor(user_id=UserId(3), role=Role.MODERATOR)


@pytest.fixture
def make_user():
    """Factory for stored User rows."""
    return _build_user


@pytest.fixture
def make_guest():
    """Factory for stored GuestIdentity rows."""
    return _build_guest
