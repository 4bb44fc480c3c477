"""SQLAlchemy repository implementations for the identity domain."""

from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trackrate.domain.identity.model.guest import GuestIdentity
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.user import User
from trackrate.domain.identity.model.value import GuestId, UserId
from trackrate.domain.identity.port.repository import GuestRepository, UserRepository
from trackrate.domain.shared.error import StorageUnavailableError
from trackrate.infrastructure.persistence.dialect import dialect_insert
from trackrate.infrastructure.persistence.tables import (
    guest_identities_table,
    users_table,
)


def _row_to_user(row: dict) -> User:
    return User(
        id=UserId(row["id"]),
        username=row["username"],
        display_name=row["display_name"],
        role=Role(row["role"]),
        banned=row["banned"],
        tracks_rated_count=row["tracks_rated_count"],
        tracks_added_count=row["tracks_added_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _row_to_guest(row: dict) -> GuestIdentity:
    return GuestIdentity(
        id=GuestId(row["id"]),
        fingerprint=row["fingerprint"],
        display_name=row["display_name"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class SQLAlchemyUserRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: UserId) -> User | None:
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user(dict(row)) if row else None

    async def create(
        self,
        username: str,
        display_name: str | None,
        role: Role,
    ) -> User | None:
        now = datetime.now(UTC)
        stmt = (
            dialect_insert(self.session, users_table)
            .values(
                username=username,
                display_name=display_name,
                role=role.value,
                banned=False,
                tracks_rated_count=0,
                tracks_added_count=0,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_nothing(index_elements=["username"])
            .returning(*users_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user(dict(row)) if row else None

    async def set_banned(self, user_id: UserId, banned: bool) -> bool:
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id, users_table.c.banned != banned)
            .values(banned=banned, updated_at=datetime.now(UTC))
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def set_role(self, user_id: UserId, role: Role) -> User | None:
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(role=role.value, updated_at=datetime.now(UTC))
            .returning(*users_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user(dict(row)) if row else None

    async def adjust_rated_count(self, user_id: UserId, delta: int) -> None:
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(tracks_rated_count=users_table.c.tracks_rated_count + delta)
        )
        await self.session.execute(stmt)


class SQLAlchemyGuestRepository(GuestRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, guest_id: GuestId) -> GuestIdentity | None:
        stmt = select(guest_identities_table).where(guest_identities_table.c.id == guest_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_guest(dict(row)) if row else None

    async def get_by_fingerprint(self, fingerprint: str) -> GuestIdentity | None:
        stmt = select(guest_identities_table).where(
            guest_identities_table.c.fingerprint == fingerprint
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_guest(dict(row)) if row else None

    async def create_if_absent(self, fingerprint: str, display_name: str) -> GuestIdentity:
        now = datetime.now(UTC)
        stmt = (
            dialect_insert(self.session, guest_identities_table)
            .values(
                fingerprint=fingerprint,
                display_name=display_name,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_nothing(index_elements=["fingerprint"])
            .returning(*guest_identities_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row:
            return _row_to_guest(dict(row))

        # Lost the race: the winner's row is now visible
        existing = await self.get_by_fingerprint(fingerprint)
        if existing is None:
            raise StorageUnavailableError(
                "Guest insert conflicted but no row found for fingerprint"
            )
        return existing

    async def rename(self, guest_id: GuestId, display_name: str) -> GuestIdentity | None:
        stmt = (
            update(guest_identities_table)
            .where(guest_identities_table.c.id == guest_id)
            .values(display_name=display_name, updated_at=datetime.now(UTC))
            .returning(*guest_identities_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_guest(dict(row)) if row else None
