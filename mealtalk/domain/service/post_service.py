"""Post domain service.

Owns the forum's post lifecycle: creation, author-only edits and deletes,
like toggling, and assembly of the nested reply forest.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from uuid import uuid4

import logfire

from mealtalk.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from mealtalk.domain.model import Post, User
from mealtalk.domain.model.post import utcnow
from mealtalk.domain.repository import PostRepository
from mealtalk.domain.value import PostCategory, PostId, UserId

from .base import Service


@dataclass(eq=False)
class PostTreeNode:
    """A post together with its replies, each a subtree of its own."""

    post: Post
    replies: list["PostTreeNode"] = field(default_factory=list)


class PostService(Service):
    """Domain service for forum post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def build_forum_tree(self) -> list[PostTreeNode]:
        """Build the forest of root posts and their nested replies.

        Algorithm:
        1. Fetch all posts in one query
        2. Group posts by parent_id into an adjacency map
        3. Take posts without a parent as roots, newest first
        4. Walk the map with an explicit stack, attaching replies oldest
           first within each node

        The walk is iterative, so reply depth is bounded only by the data.
        Replies whose parent no longer exists are unreachable from any root
        and are left out.

        Returns:
            Root nodes with replies populated to arbitrary depth
        """
        with logfire.span("post_service.build_forum_tree"):
            posts = await self.post_repository.find_all()
            logfire.info("Fetched posts for tree", count=len(posts))

            children: dict[PostId, list[Post]] = defaultdict(list)
            roots: list[Post] = []
            for post in posts:
                if post.parent_id is None:
                    roots.append(post)
                else:
                    children[post.parent_id].append(post)

            roots.sort(key=lambda p: p.created_at, reverse=True)

            tree = [PostTreeNode(post=root) for root in roots]
            visited: set[PostId] = {root.id for root in roots}
            stack: list[PostTreeNode] = list(tree)

            while stack:
                node = stack.pop()
                replies = sorted(
                    children.get(node.post.id, []), key=lambda p: p.created_at
                )
                for reply in replies:
                    # Guards against parent_id cycles in stored data
                    if reply.id in visited:
                        continue
                    visited.add(reply.id)
                    child = PostTreeNode(post=reply)
                    node.replies.append(child)
                    stack.append(child)

            orphan_count = len(posts) - len(visited)
            if orphan_count:
                logfire.info("Orphaned replies excluded", count=orphan_count)

            logfire.info("Built forum tree", root_count=len(tree))
            return tree

    async def get_post_by_id(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            The post

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))
            return post

    async def create_post(
        self,
        author: User,
        title: str,
        content: str,
        category: PostCategory,
        parent_id: PostId | None = None,
    ) -> Post:
        """Create a root post or a reply.

        The parent is stored as given; its existence is not checked.
        Title and content must hold more than whitespace, as on edit.

        Args:
            author: Resolved author account
            title: Post title
            content: Post body
            category: Post category
            parent_id: Post being replied to (None for a root post)

        Returns:
            Created post

        Raises:
            ValidationError: If title or content is blank
        """
        with logfire.span(
            "post_service.create_post",
            author_id=str(author.id),
            category=category.value,
            parent_id=str(parent_id) if parent_id else None,
        ):
            if not title.strip():
                raise ValidationError("Title cannot be empty")
            if not content.strip():
                raise ValidationError("Content cannot be empty")

            now = utcnow()
            post = Post(
                id=PostId(uuid4()),
                author_id=author.id,
                author_name=author.display_name,
                title=title,
                content=content,
                category=category,
                liker_ids=[],
                parent_id=parent_id,
                created_at=now,
                updated_at=now,
            )

            saved = await self.post_repository.save(post)
            logfire.info(
                "Post created",
                post_id=str(saved.id),
                author_id=str(author.id),
                is_reply=parent_id is not None,
            )
            return saved

    async def edit_post(
        self,
        post_id: PostId,
        user_id: UserId,
        title: str | None = None,
        content: str | None = None,
    ) -> Post:
        """Apply a partial update to a post's title and/or content.

        Fields passed as None keep their stored value. ``updated_at`` is
        refreshed on every successful edit. Only the edited columns are
        written, so likes toggled meanwhile survive the edit.

        Args:
            post_id: Post ID
            user_id: Requesting user (must be the author)
            title: New title, or None to keep
            content: New content, or None to keep

        Returns:
            Updated post

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If user is not the author
            ValidationError: If a supplied field is blank
        """
        with logfire.span(
            "post_service.edit_post",
            post_id=str(post_id),
            user_id=str(user_id),
            title_changed=title is not None,
            content_changed=content is not None,
        ):
            post = await self.get_post_by_id(post_id)
            self._ensure_author(post, user_id)

            if title is not None and not title.strip():
                raise ValidationError("Title cannot be empty")
            if content is not None and not content.strip():
                raise ValidationError("Content cannot be empty")

            saved = await self.post_repository.update_content(
                post_id, updated_at=utcnow(), title=title, content=content
            )
            if saved is None:
                # Removed by a concurrent request between fetch and update
                raise NotFoundError("Post", str(post_id))

            logfire.info("Post edited", post_id=str(post_id))
            return saved

    async def delete_post(self, post_id: PostId, user_id: UserId) -> None:
        """Delete a single post.

        Replies are not cascade-deleted and become orphans.

        Args:
            post_id: Post ID
            user_id: Requesting user (must be the author)

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If user is not the author
        """
        with logfire.span(
            "post_service.delete_post", post_id=str(post_id), user_id=str(user_id)
        ):
            post = await self.get_post_by_id(post_id)
            self._ensure_author(post, user_id)

            deleted = await self.post_repository.delete(post_id)
            if not deleted:
                # Removed by a concurrent request between fetch and delete
                raise NotFoundError("Post", str(post_id))

            logfire.info("Post deleted", post_id=str(post_id))

    async def toggle_like(self, post_id: PostId, user_id: UserId) -> list[UserId]:
        """Like the post, or remove the like if the user already likes it.

        Anyone may like any post, including their own.

        Args:
            post_id: Post ID
            user_id: User toggling the like

        Returns:
            The post's like set after the toggle

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span(
            "post_service.toggle_like", post_id=str(post_id), user_id=str(user_id)
        ):
            likes = await self.post_repository.toggle_like(post_id, user_id)
            if likes is None:
                logfire.warn("Like on non-existent post", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))

            logfire.info(
                "Like toggled",
                post_id=str(post_id),
                liked=user_id in likes,
                like_count=len(likes),
            )
            return likes

    @staticmethod
    def _ensure_author(post: Post, user_id: UserId) -> None:
        if not post.is_authored_by(user_id):
            logfire.warn(
                "Unauthorized post modification attempt",
                post_id=str(post.id),
                user_id=str(user_id),
            )
            raise NotAuthorizedError("post", str(post.id), str(user_id))
