"""In-memory post repository for testing."""

from datetime import datetime
from typing import Optional

from mealtalk.domain.model.post import Post
from mealtalk.domain.repository.post import PostRepository
from mealtalk.domain.value import PostId, UserId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing.

    Methods never await between reading and writing a post, so each call
    is atomic within the event loop.
    """

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_all(self) -> list[Post]:
        """Fetch every post."""
        return list(self._posts.values())

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    async def update_content(
        self,
        post_id: PostId,
        updated_at: datetime,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Optional[Post]:
        """Update title/content on the stored post."""
        post = self._posts.get(post_id)
        if post is None:
            return None
        changes: dict[str, object] = {"updated_at": updated_at}
        if title is not None:
            changes["title"] = title
        if content is not None:
            changes["content"] = content
        updated = post.model_copy(update=changes)
        self._posts[post_id] = updated
        return updated

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post."""
        return self._posts.pop(post_id, None) is not None

    async def toggle_like(
        self, post_id: PostId, user_id: UserId
    ) -> Optional[list[UserId]]:
        """Toggle a like."""
        post = self._posts.get(post_id)
        if post is None:
            return None
        updated = post.with_like_toggled(user_id)
        self._posts[post_id] = updated
        return list(updated.liker_ids)
