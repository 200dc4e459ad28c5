"""Post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from mealtalk.domain.model.post import Post
from mealtalk.domain.value import PostId, UserId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Every operation touches a single post document. There are no
    multi-document transactions; a single write is atomic.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Post]:
        """Fetch every post, roots and replies alike.

        Used to assemble reply trees in memory from a single query.
        No ordering is guaranteed.

        Returns:
            All stored posts
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        An update replaces the whole document.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def update_content(
        self,
        post_id: PostId,
        updated_at: datetime,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Optional[Post]:
        """Write an edit to a post's title and/or content.

        Only the supplied fields and ``updated_at`` are written; every other
        field, including the like set, keeps its stored value so concurrent
        like toggles are never overwritten.

        Args:
            post_id: The post ID
            updated_at: Edit timestamp
            title: New title, or None to keep the stored one
            content: New content, or None to keep the stored one

        Returns:
            The post as stored after the edit, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete exactly one post (hard delete).

        Replies referencing the post are left in place.

        Args:
            post_id: The post ID to delete

        Returns:
            True if a post was removed, False if none existed
        """
        pass

    @abstractmethod
    async def toggle_like(
        self, post_id: PostId, user_id: UserId
    ) -> Optional[List[UserId]]:
        """Atomically add or remove a user from a post's like set.

        Removes ``user_id`` if present, appends it otherwise, in one store
        operation so concurrent toggles cannot overwrite each other.

        Args:
            post_id: The post ID
            user_id: The user toggling their like

        Returns:
            The like set after the toggle, or None if the post doesn't exist
        """
        pass
