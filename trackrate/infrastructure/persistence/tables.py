"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.types import JSON

metadata = MetaData()

_ONE_IDENTITY = "(user_id IS NULL) <> (guest_id IS NULL)"


def _score_column(name: str) -> Column:
    return Column(name, Integer, nullable=False)


def _score_check(name: str, table: str) -> CheckConstraint:
    return CheckConstraint(f"{name} BETWEEN 0 AND 10", name=f"ck_{table}_{name}_range")


# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(50), nullable=False),
    Column("display_name", String(255), nullable=True),
    Column("role", String(32), nullable=False),  # Role as string
    Column("banned", Boolean, nullable=False, default=False),
    Column("tracks_rated_count", Integer, nullable=False, default=0),
    Column("tracks_added_count", Integer, nullable=False, default=0),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("username", name="uq_users_username"),
    CheckConstraint(
        "role IN ('super_admin', 'admin', 'moderator')", name="ck_users_role"
    ),
)


# ============================================================================
# GUEST IDENTITIES TABLE
# ============================================================================
guest_identities_table = Table(
    "guest_identities",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("fingerprint", String(255), nullable=False),
    Column("display_name", String(255), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("fingerprint", name="uq_guest_fingerprint"),
)


# ============================================================================
# USER PERMISSIONS TABLE (one row per user, created lazily)
# ============================================================================
user_permissions_table = Table(
    "user_permissions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("can_edit_others_ratings", Boolean, nullable=False),
    Column("can_delete_others_ratings", Boolean, nullable=False),
    Column("can_verify_artists", Boolean, nullable=False),
    Column("can_add_artists", Boolean, nullable=False),
    Column("can_delete_artists", Boolean, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("user_id", name="uq_user_permissions_user"),
)


# ============================================================================
# CATALOG TABLES (maintained outside this service; read for existence only)
# ============================================================================
artists_table = Table(
    "artists",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

tracks_table = Table(
    "tracks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("artist_id", Integer, ForeignKey("artists.id", ondelete="CASCADE"), nullable=False),
    Column("title", String(255), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_tracks_artist_id", tracks_table.c.artist_id)


# ============================================================================
# RATINGS TABLE
# ============================================================================
ratings_table = Table(
    "ratings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("track_id", Integer, ForeignKey("tracks.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    _score_column("vocals"),
    _score_column("production"),
    _score_column("lyrics"),
    _score_column("quality"),
    _score_column("vibe"),
    Column("notes", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("track_id", "user_id", name="uq_ratings_track_user"),
    *(
        _score_check(name, "ratings")
        for name in ("vocals", "production", "lyrics", "quality", "vibe")
    ),
)

Index("idx_ratings_user_id", ratings_table.c.user_id)


# ============================================================================
# LIKES TABLE
# ============================================================================
likes_table = Table(
    "likes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("entity_type", String(16), nullable=False),  # EntityType as string
    Column("entity_id", Integer, nullable=False),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
    Column(
        "guest_id",
        Integer,
        ForeignKey("guest_identities.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("created_at", DateTime(timezone=True), nullable=False),
    # NULLs are distinct, so each constraint only binds rows of its identity kind
    UniqueConstraint("entity_type", "entity_id", "user_id", name="uq_likes_entity_user"),
    UniqueConstraint("entity_type", "entity_id", "guest_id", name="uq_likes_entity_guest"),
    CheckConstraint(_ONE_IDENTITY, name="ck_likes_one_identity"),
)

Index("idx_likes_entity", likes_table.c.entity_type, likes_table.c.entity_id)


# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("track_id", Integer, ForeignKey("tracks.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
    Column(
        "guest_id",
        Integer,
        ForeignKey("guest_identities.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("body", Text, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    CheckConstraint(_ONE_IDENTITY, name="ck_comments_one_identity"),
)

Index("idx_comments_track_id", comments_table.c.track_id)


# ============================================================================
# AWARDS TABLES
# ============================================================================
awards_table = Table(
    "awards",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("description", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("name", name="uq_awards_name"),
)

user_awards_table = Table(
    "user_awards",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("award_id", Integer, ForeignKey("awards.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("assigned_by", Integer, ForeignKey("users.id"), nullable=False),
    Column("assigned_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("award_id", "user_id", name="uq_user_awards_award_user"),
)


# ============================================================================
# ACTIVITY LOGS TABLE (append-only)
# ============================================================================
activity_logs_table = Table(
    "activity_logs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("actor_id", String(64), nullable=False),  # "user:3", "guest:7", "system"
    Column("action", String(64), nullable=False),
    Column("target_type", String(32), nullable=True),
    Column("target_id", Integer, nullable=True),
    Column("details", JSON, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_activity_logs_created_at", activity_logs_table.c.created_at)
Index("idx_activity_logs_actor_id", activity_logs_table.c.actor_id)
