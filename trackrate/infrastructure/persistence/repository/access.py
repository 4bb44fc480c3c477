"""SQLAlchemy repository implementations for the access domain."""

from datetime import UTC, datetime

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from trackrate.domain.access.model.award import Award, AwardId, UserAward
from trackrate.domain.access.model.permission import (
    PERMISSION_DEFAULTS,
    PermissionSet,
    PermissionUpdate,
)
from trackrate.domain.access.port.repository import AwardRepository, PermissionRepository
from trackrate.domain.identity.model.value import UserId
from trackrate.infrastructure.persistence.dialect import dialect_insert
from trackrate.infrastructure.persistence.tables import (
    awards_table,
    user_awards_table,
    user_permissions_table,
)


def _row_to_permissions(row: dict) -> PermissionSet:
    return PermissionSet(
        user_id=UserId(row["user_id"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        **{c.value: row[c.value] for c in PERMISSION_DEFAULTS},
    )


def _row_to_award(row: dict) -> Award:
    return Award(
        id=AwardId(row["id"]),
        name=row["name"],
        description=row["description"],
        created_at=row["created_at"],
    )


def _row_to_user_award(row: dict) -> UserAward:
    return UserAward(
        id=row["id"],
        award_id=AwardId(row["award_id"]),
        user_id=UserId(row["user_id"]),
        assigned_by=UserId(row["assigned_by"]),
        assigned_at=row["assigned_at"],
    )


class SQLAlchemyPermissionRepository(PermissionRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: UserId) -> PermissionSet | None:
        stmt = select(user_permissions_table).where(user_permissions_table.c.user_id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_permissions(dict(row)) if row else None

    async def apply(self, user_id: UserId, patch: PermissionUpdate) -> PermissionSet:
        now = datetime.now(UTC)
        defaults: dict[str, bool] = {c.value: v for c, v in PERMISSION_DEFAULTS.items()}
        create = (
            dialect_insert(self.session, user_permissions_table)
            .values(user_id=user_id, created_at=now, updated_at=now, **defaults)
            .on_conflict_do_nothing(index_elements=["user_id"])
        )
        await self.session.execute(create)

        stmt = (
            update(user_permissions_table)
            .where(user_permissions_table.c.user_id == user_id)
            .values(updated_at=now, **patch.changes())
            .returning(*user_permissions_table.c)
        )
        result = await self.session.execute(stmt)
        return _row_to_permissions(dict(result.mappings().one()))


class SQLAlchemyAwardRepository(AwardRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, award_id: AwardId) -> Award | None:
        stmt = select(awards_table).where(awards_table.c.id == award_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_award(dict(row)) if row else None

    async def create(self, name: str, description: str | None) -> Award | None:
        stmt = (
            dialect_insert(self.session, awards_table)
            .values(name=name, description=description, created_at=datetime.now(UTC))
            .on_conflict_do_nothing(index_elements=["name"])
            .returning(*awards_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_award(dict(row)) if row else None

    async def list_all(self, limit: int, offset: int) -> list[Award]:
        stmt = (
            select(awards_table)
            .order_by(awards_table.c.created_at.desc(), awards_table.c.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [_row_to_award(dict(row)) for row in result.mappings()]

    async def update(self, award_id: AwardId, changes: dict[str, str | None]) -> Award | None:
        stmt = (
            update(awards_table)
            .where(awards_table.c.id == award_id)
            .values(**changes)
            .returning(*awards_table.c)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError:
            # uq_awards_name: an UPDATE has no ON CONFLICT form
            return None
        row = result.mappings().first()
        return _row_to_award(dict(row)) if row else None

    async def delete(self, award_id: AwardId) -> bool:
        # Grants go with the award through ON DELETE CASCADE
        stmt = delete(awards_table).where(awards_table.c.id == award_id)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def assign(
        self, award_id: AwardId, user_id: UserId, assigned_by: UserId
    ) -> UserAward | None:
        stmt = (
            dialect_insert(self.session, user_awards_table)
            .values(
                award_id=award_id,
                user_id=user_id,
                assigned_by=assigned_by,
                assigned_at=datetime.now(UTC),
            )
            .on_conflict_do_nothing(index_elements=["award_id", "user_id"])
            .returning(*user_awards_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user_award(dict(row)) if row else None

    async def revoke(self, award_id: AwardId, user_id: UserId) -> bool:
        stmt = delete(user_awards_table).where(
            user_awards_table.c.award_id == award_id,
            user_awards_table.c.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def list_for_user(self, user_id: UserId) -> list[Award]:
        stmt = (
            select(awards_table)
            .join(user_awards_table, user_awards_table.c.award_id == awards_table.c.id)
            .where(user_awards_table.c.user_id == user_id)
            .order_by(user_awards_table.c.assigned_at.desc())
        )
        result = await self.session.execute(stmt)
        return [_row_to_award(dict(row)) for row in result.mappings()]
