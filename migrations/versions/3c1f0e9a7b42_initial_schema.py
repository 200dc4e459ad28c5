"""initial_schema

Create the schema for the MealTalk forum:
- Users (accounts referenced by posts, managed by the account service)
- Forum posts (root posts and replies in one table, linked by parent_id)

Revision ID: 3c1f0e9a7b42
Revises:
Create Date: 2026-10-19 10:12:44.318209

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0e9a7b42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE post_category AS ENUM ('recipe', 'health', 'tips', 'question');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # ========================================================================
    # FORUM_POSTS table
    # ========================================================================
    # parent_id has no foreign key: replies outlive a deleted parent
    op.create_table(
        "forum_posts",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_name", sa.String(255), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
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
        sa.Column(
            "liker_ids",
            postgresql.ARRAY(sa.UUID()),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("char_length(title) > 0", name="ck_forum_posts_title"),
        sa.CheckConstraint(
            "char_length(content) > 0", name="ck_forum_posts_content"
        ),
    )
    op.create_index("idx_forum_posts_parent_id", "forum_posts", ["parent_id"])
    op.create_index("idx_forum_posts_created_at", "forum_posts", ["created_at"])
    op.create_index("idx_forum_posts_author_id", "forum_posts", ["author_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_forum_posts_author_id", table_name="forum_posts")
    op.drop_index("idx_forum_posts_created_at", table_name="forum_posts")
    op.drop_index("idx_forum_posts_parent_id", table_name="forum_posts")
    op.drop_table("forum_posts")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS post_category")
