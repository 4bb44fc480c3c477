"""Integration tests for like and comment storage."""

import pytest
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError

from trackrate.domain.catalog.model.value import EntityType, TrackId
from trackrate.domain.identity.model.engager import Engager
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.value import UserId
from trackrate.infrastructure.persistence.repository.engagement import (
    SQLAlchemyCommentRepository,
    SQLAlchemyLikeRepository,
)
from trackrate.infrastructure.persistence.repository.identity import SQLAlchemyGuestRepository
from trackrate.infrastructure.persistence.tables import likes_table


@pytest.fixture
def likes(session) -> SQLAlchemyLikeRepository:
    return SQLAlchemyLikeRepository(session)


@pytest.fixture
def comments(session) -> SQLAlchemyCommentRepository:
    return SQLAlchemyCommentRepository(session)


class TestLikeRepository:
    @pytest.mark.asyncio
    async def test_second_like_by_same_user_is_suppressed(self, likes, catalog):
        user = Engager.for_user(UserId(2))

        first = await likes.add(EntityType.TRACK, 10, user)
        second = await likes.add(EntityType.TRACK, 10, user)

        assert first is not None
        assert second is None
        assert await likes.count(EntityType.TRACK, 10) == 1

    @pytest.mark.asyncio
    async def test_user_and_guest_like_independently(self, session, likes, catalog):
        guest = await SQLAlchemyGuestRepository(session).create_if_absent("fp-1", "Guesty")

        await likes.add(EntityType.ARTIST, 1, Engager.for_user(UserId(2)))
        await likes.add(EntityType.ARTIST, 1, Engager.for_guest(guest.id))
        duplicate = await likes.add(EntityType.ARTIST, 1, Engager.for_guest(guest.id))

        assert duplicate is None
        assert await likes.count(EntityType.ARTIST, 1) == 2
        assert await likes.count(EntityType.TRACK, 1) == 0

    @pytest.mark.asyncio
    async def test_remove_and_exists(self, likes, catalog):
        user = Engager.for_user(UserId(2))
        await likes.add(EntityType.TRACK, 10, user)

        assert await likes.exists(EntityType.TRACK, 10, user) is True
        assert await likes.remove(EntityType.TRACK, 10, user) is True
        assert await likes.remove(EntityType.TRACK, 10, user) is False
        assert await likes.exists(EntityType.TRACK, 10, user) is False

    @pytest.mark.asyncio
    async def test_row_with_both_identities_rejected_by_storage(self, session, catalog):
        guest = await SQLAlchemyGuestRepository(session).create_if_absent("fp-2", "Guesty")

        with pytest.raises(IntegrityError):
            await session.execute(
                insert(likes_table).values(
                    entity_type="track",
                    entity_id=10,
                    user_id=2,
                    guest_id=guest.id,
                    created_at=guest.created_at,
                )
            )


class TestCommentRepository:
    @pytest.mark.asyncio
    async def test_list_newest_first_with_author_names(self, session, comments, catalog):
        guest = await SQLAlchemyGuestRepository(session).create_if_absent("fp-3", "Night Owl")

        first = await comments.add(TrackId(10), Engager.for_user(UserId(2)), "First!")
        second = await comments.add(TrackId(10), Engager.for_guest(guest.id), "Second")
        await comments.add(TrackId(11), Engager.for_guest(guest.id), "Elsewhere")

        views = await comments.list_for_track(TrackId(10))

        assert [v.id for v in views] == [second.id, first.id]
        assert views[0].display_name == "Night Owl"
        assert views[0].role is None
        assert views[1].display_name == "user2"
        assert views[1].role is Role.MODERATOR

    @pytest.mark.asyncio
    async def test_delete(self, comments, catalog):
        comment = await comments.add(TrackId(10), Engager.for_user(UserId(2)), "bye")

        assert await comments.delete(comment.id) is True
        assert await comments.get(comment.id) is None
        assert await comments.delete(comment.id) is False
