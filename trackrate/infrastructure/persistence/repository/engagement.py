"""SQLAlchemy repository implementations for likes and comments."""

from datetime import UTC, datetime

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from trackrate.domain.catalog.model.value import EntityType, TrackId
from trackrate.domain.engagement.model.comment import Comment, CommentId, CommentView
from trackrate.domain.engagement.model.like import Like
from trackrate.domain.engagement.port.repository import CommentRepository, LikeRepository
from trackrate.domain.identity.model.engager import Engager
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.value import GuestId, UserId
from trackrate.infrastructure.persistence.dialect import dialect_insert
from trackrate.infrastructure.persistence.tables import (
    comments_table,
    guest_identities_table,
    likes_table,
    users_table,
)


def _row_to_like(row: dict) -> Like:
    return Like(
        id=row["id"],
        entity_type=EntityType(row["entity_type"]),
        entity_id=row["entity_id"],
        user_id=UserId(row["user_id"]) if row["user_id"] is not None else None,
        guest_id=GuestId(row["guest_id"]) if row["guest_id"] is not None else None,
        created_at=row["created_at"],
    )


def _row_to_comment(row: dict) -> Comment:
    return Comment(
        id=CommentId(row["id"]),
        track_id=TrackId(row["track_id"]),
        user_id=UserId(row["user_id"]) if row["user_id"] is not None else None,
        guest_id=GuestId(row["guest_id"]) if row["guest_id"] is not None else None,
        body=row["body"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _like_key(entity_type: EntityType, entity_id: int) -> list[ColumnElement[bool]]:
    return [
        likes_table.c.entity_type == entity_type.value,
        likes_table.c.entity_id == entity_id,
    ]


def _identity_clause(table, engager: Engager) -> ColumnElement[bool]:
    if engager.user_id is not None:
        return table.c.user_id == engager.user_id
    return table.c.guest_id == engager.guest_id


class SQLAlchemyLikeRepository(LikeRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, entity_type: EntityType, entity_id: int, engager: Engager) -> Like | None:
        # No conflict target: either identity's unique constraint suppresses the row
        stmt = (
            dialect_insert(self.session, likes_table)
            .values(
                entity_type=entity_type.value,
                entity_id=entity_id,
                user_id=engager.user_id,
                guest_id=engager.guest_id,
                created_at=datetime.now(UTC),
            )
            .on_conflict_do_nothing()
            .returning(*likes_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_like(dict(row)) if row else None

    async def remove(self, entity_type: EntityType, entity_id: int, engager: Engager) -> bool:
        stmt = delete(likes_table).where(
            *_like_key(entity_type, entity_id),
            _identity_clause(likes_table, engager),
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def count(self, entity_type: EntityType, entity_id: int) -> int:
        stmt = select(func.count()).select_from(likes_table).where(*_like_key(entity_type, entity_id))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def exists(self, entity_type: EntityType, entity_id: int, engager: Engager) -> bool:
        stmt = select(likes_table.c.id).where(
            *_like_key(entity_type, entity_id),
            _identity_clause(likes_table, engager),
        )
        result = await self.session.execute(stmt)
        return result.first() is not None


class SQLAlchemyCommentRepository(CommentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, track_id: TrackId, engager: Engager, body: str) -> Comment:
        now = datetime.now(UTC)
        stmt = (
            dialect_insert(self.session, comments_table)
            .values(
                track_id=track_id,
                user_id=engager.user_id,
                guest_id=engager.guest_id,
                body=body,
                created_at=now,
                updated_at=now,
            )
            .returning(*comments_table.c)
        )
        result = await self.session.execute(stmt)
        return _row_to_comment(dict(result.mappings().one()))

    async def get(self, comment_id: CommentId) -> Comment | None:
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_comment(dict(row)) if row else None

    async def delete(self, comment_id: CommentId) -> bool:
        stmt = delete(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def list_for_track(self, track_id: TrackId) -> list[CommentView]:
        stmt = (
            select(
                comments_table,
                users_table.c.display_name.label("user_display_name"),
                users_table.c.username,
                users_table.c.role,
                guest_identities_table.c.display_name.label("guest_display_name"),
            )
            .select_from(
                comments_table.outerjoin(
                    users_table, comments_table.c.user_id == users_table.c.id
                ).outerjoin(
                    guest_identities_table,
                    comments_table.c.guest_id == guest_identities_table.c.id,
                )
            )
            .where(comments_table.c.track_id == track_id)
            .order_by(comments_table.c.created_at.desc(), comments_table.c.id.desc())
        )
        result = await self.session.execute(stmt)

        views = []
        for row in result.mappings():
            comment = _row_to_comment(dict(row))
            if comment.user_id is not None:
                display_name = row["user_display_name"] or row["username"]
                role = Role(row["role"]) if row["role"] else None
            else:
                display_name = row["guest_display_name"]
                role = None
            views.append(
                CommentView(
                    **comment.model_dump(),
                    display_name=display_name,
                    role=role,
                )
            )
        return views
