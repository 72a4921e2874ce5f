"""SQLAlchemy table definitions for Quill.

Domain models are immutable pydantic objects, so the persistence layer
uses SQLAlchemy Core tables plus explicit mappers rather than ORM classes.
These definitions match the schema created by the Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("display_name", String(255), nullable=False),
    Column("handle", String(32), nullable=True),  # NULL until profile setup
    Column("nickname", String(50), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("password_hash", String(255), nullable=True),  # NULL for federated-only
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
)

# Handles are unique regardless of case
Index("uq_users_handle_lower", func.lower(users_table.c.handle), unique=True)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("title", String(200), nullable=False),
    Column("content", Text, nullable=False),
    Column("excerpt", Text, nullable=False),
    Column(
        "author_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    # Snapshot of the author's profile at write time
    Column("author_handle", String(32), nullable=False),
    Column("author_nickname", String(50), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index("idx_posts_author_created", posts_table.c.author_id, posts_table.c.created_at)

# ============================================================================
# FOLLOWS TABLE
# ============================================================================
follows_table = Table(
    "follows",
    metadata,
    Column(
        "follower_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "followee_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    UniqueConstraint("follower_id", "followee_id", name="uq_follows_pair"),
    CheckConstraint("follower_id <> followee_id", name="ck_follows_not_self"),
)

Index("idx_follows_followee", follows_table.c.followee_id)
