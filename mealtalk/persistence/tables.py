"""SQLAlchemy table definitions for the forum.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, Index, MetaData, String, Table, Text
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the account service, read here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# FORUM POSTS TABLE
# ============================================================================
# One row per post document. parent_id deliberately has no foreign key:
# deleting a post leaves its replies pointing at a missing parent.
forum_posts_table = Table(
    "forum_posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("author_id", UUID, nullable=False),
    Column("author_name", String(255), nullable=False),  # Snapshot at creation
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "category",
        postgresql.ENUM(
            "recipe",
            "health",
            "tips",
            "question",
            name="post_category",
            create_type=False,
        ),
        nullable=False,
    ),
    Column(
        "liker_ids",
        postgresql.ARRAY(UUID),
        nullable=False,
        server_default="{}",
    ),
    Column("parent_id", UUID, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_forum_posts_parent_id", forum_posts_table.c.parent_id)
Index("idx_forum_posts_created_at", forum_posts_table.c.created_at)
Index("idx_forum_posts_author_id", forum_posts_table.c.author_id)
