"""initial_schema

Users, guests, permissions, catalog, ratings, likes, comments, awards and the
activity log.

Revision ID: initial_schema
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "initial_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SCORES = ("vocals", "production", "lyrics", "quality", "vibe")
ONE_IDENTITY = "(user_id IS NULL) <> (guest_id IS NULL)"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""
    # USERS TABLE
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("banned", sa.Boolean(), nullable=False),
        sa.Column("tracks_rated_count", sa.Integer(), nullable=False),
        sa.Column("tracks_added_count", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.CheckConstraint(
            "role IN ('super_admin', 'admin', 'moderator')", name="ck_users_role"
        ),
    )

    # GUEST IDENTITIES TABLE
    op.create_table(
        "guest_identities",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("fingerprint", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("fingerprint", name="uq_guest_fingerprint"),
    )

    # USER PERMISSIONS TABLE
    op.create_table(
        "user_permissions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("can_edit_others_ratings", sa.Boolean(), nullable=False),
        sa.Column("can_delete_others_ratings", sa.Boolean(), nullable=False),
        sa.Column("can_verify_artists", sa.Boolean(), nullable=False),
        sa.Column("can_add_artists", sa.Boolean(), nullable=False),
        sa.Column("can_delete_artists", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", name="uq_user_permissions_user"),
    )

    # CATALOG TABLES
    op.create_table(
        "artists",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "tracks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("artist_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["artist_id"], ["artists.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_tracks_artist_id", "tracks", ["artist_id"])

    # RATINGS TABLE
    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("track_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        *(sa.Column(name, sa.Integer(), nullable=False) for name in SCORES),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["track_id"], ["tracks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("track_id", "user_id", name="uq_ratings_track_user"),
        *(
            sa.CheckConstraint(f"{name} BETWEEN 0 AND 10", name=f"ck_ratings_{name}_range")
            for name in SCORES
        ),
    )
    op.create_index("idx_ratings_user_id", "ratings", ["user_id"])

    # LIKES TABLE
    op.create_table(
        "likes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("entity_type", sa.String(16), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("guest_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["guest_id"], ["guest_identities.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "entity_type", "entity_id", "user_id", name="uq_likes_entity_user"
        ),
        sa.UniqueConstraint(
            "entity_type", "entity_id", "guest_id", name="uq_likes_entity_guest"
        ),
        sa.CheckConstraint(ONE_IDENTITY, name="ck_likes_one_identity"),
    )
    op.create_index("idx_likes_entity", "likes", ["entity_type", "entity_id"])

    # COMMENTS TABLE
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("track_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("guest_id", sa.Integer(), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["track_id"], ["tracks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["guest_id"], ["guest_identities.id"], ondelete="CASCADE"),
        sa.CheckConstraint(ONE_IDENTITY, name="ck_comments_one_identity"),
    )
    op.create_index("idx_comments_track_id", "comments", ["track_id"])

    # AWARDS TABLES
    op.create_table(
        "awards",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_awards_name"),
    )
    op.create_table(
        "user_awards",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("award_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("assigned_by", sa.Integer(), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["award_id"], ["awards.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["assigned_by"], ["users.id"]),
        sa.UniqueConstraint("award_id", "user_id", name="uq_user_awards_award_user"),
    )

    # ACTIVITY LOGS TABLE
    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("actor_id", sa.String(64), nullable=False),
        sa.Column("action", sa.String(64), nullable=False),
        sa.Column("target_type", sa.String(32), nullable=True),
        sa.Column("target_id", sa.Integer(), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_activity_logs_created_at", "activity_logs", ["created_at"])
    op.create_index("idx_activity_logs_actor_id", "activity_logs", ["actor_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("activity_logs")
    op.drop_table("user_awards")
    op.drop_table("awards")
    op.drop_table("comments")
    op.drop_table("likes")
    op.drop_table("ratings")
    op.drop_table("tracks")
    op.drop_table("artists")
    op.drop_table("user_permissions")
    op.drop_table("guest_identities")
    op.drop_table("users")
