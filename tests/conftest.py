"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from mealtalk.domain.model import Post, User
from mealtalk.domain.value import PostCategory, PostId, UserId

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_user(name: str | None = "Alice", email: str | None = None) -> User:
    """Build a user with a fresh ID."""
    user_id = UserId(uuid4())
    return User(
        id=user_id,
        email=email or f"{user_id.hex[:8]}@example.com",
        name=name,
    )


def make_post(
    author: User,
    title: str = "Test Post",
    parent_id: PostId | None = None,
    minutes: int = 0,
    category: PostCategory = PostCategory.RECIPE,
    liker_ids: list[UserId] | None = None,
) -> Post:
    """Build a post by ``author`` created ``minutes`` after BASE_TIME.

    Offsets give tests a deterministic creation order.
    """
    created_at = BASE_TIME + timedelta(minutes=minutes)
    return Post(
        id=PostId(uuid4()),
        author_id=author.id,
        author_name=author.display_name,
        title=title,
        content=f"Content of {title}",
        category=category,
        liker_ids=liker_ids or [],
        parent_id=parent_id,
        created_at=created_at,
        updated_at=created_at,
    )
