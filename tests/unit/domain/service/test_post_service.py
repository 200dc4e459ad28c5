"""Unit tests for PostService."""

import asyncio
from typing import Optional
from uuid import uuid4

import pytest

from mealtalk.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from mealtalk.domain.model import Post
from mealtalk.domain.repository import PostRepository
from mealtalk.domain.service import PostService, PostTreeNode
from mealtalk.domain.value import PostCategory, PostId, UserId
from mealtalk.persistence.repository.inmemory import InMemoryPostRepository
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def _flatten(nodes: list[PostTreeNode]) -> list[PostId]:
    ids = []
    for node in nodes:
        ids.append(node.post.id)
        ids.extend(_flatten(node.replies))
    return ids


class LikeDuringReadRepository(InMemoryPostRepository):
    """Toggles a like right after the first read, as a racing request would."""

    def __init__(self, liker_id: UserId) -> None:
        super().__init__()
        self._liker_id = liker_id
        self._raced = False

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        post = await super().find_by_id(post_id)
        if post is not None and not self._raced:
            self._raced = True
            await self.toggle_like(post_id, self._liker_id)
        return post


class TestBuildForumTree:
    """Tests for build_forum_tree method."""

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_forest(self, unit_env):
        """No posts should produce no roots."""
        post_service = await unit_env.get(PostService)

        tree = await post_service.build_forum_tree()

        assert tree == []

    @pytest.mark.asyncio
    async def test_roots_are_newest_first(self, unit_env):
        """Root posts should be ordered by creation time, descending."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user()

        oldest = make_post(author, "Oldest", minutes=0)
        newest = make_post(author, "Newest", minutes=20)
        middle = make_post(author, "Middle", minutes=10)
        for post in (oldest, newest, middle):
            await post_repo.save(post)

        # Act
        tree = await post_service.build_forum_tree()

        # Assert
        assert [node.post.id for node in tree] == [newest.id, middle.id, oldest.id]

    @pytest.mark.asyncio
    async def test_replies_are_oldest_first_at_every_depth(self, unit_env):
        """Replies should be ordered by creation time, ascending."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user()

        root = make_post(author, "Root", minutes=0)
        late_reply = make_post(author, "Late", parent_id=root.id, minutes=30)
        early_reply = make_post(author, "Early", parent_id=root.id, minutes=5)
        nested_late = make_post(
            author, "Nested late", parent_id=early_reply.id, minutes=50
        )
        nested_early = make_post(
            author, "Nested early", parent_id=early_reply.id, minutes=40
        )
        for post in (root, late_reply, early_reply, nested_late, nested_early):
            await post_repo.save(post)

        # Act
        tree = await post_service.build_forum_tree()

        # Assert
        assert len(tree) == 1
        replies = tree[0].replies
        assert [node.post.id for node in replies] == [early_reply.id, late_reply.id]
        assert [node.post.id for node in replies[0].replies] == [
            nested_early.id,
            nested_late.id,
        ]
        assert replies[1].replies == []

    @pytest.mark.asyncio
    async def test_every_reachable_post_appears_exactly_once(self, unit_env):
        """Every post reachable from a root should appear once, under its parent."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user()

        root_a = make_post(author, "Root A", minutes=0)
        root_b = make_post(author, "Root B", minutes=1)
        reply_a1 = make_post(author, "A1", parent_id=root_a.id, minutes=2)
        reply_a1a = make_post(author, "A1a", parent_id=reply_a1.id, minutes=3)
        reply_a1a1 = make_post(author, "A1a1", parent_id=reply_a1a.id, minutes=4)
        reply_b1 = make_post(author, "B1", parent_id=root_b.id, minutes=5)
        posts = [root_a, root_b, reply_a1, reply_a1a, reply_a1a1, reply_b1]
        for post in posts:
            await post_repo.save(post)

        # Act
        tree = await post_service.build_forum_tree()

        # Assert
        flattened = _flatten(tree)
        assert sorted(flattened) == sorted(p.id for p in posts)
        assert len(flattened) == len(set(flattened))

        deepest = tree[1].replies[0].replies[0].replies[0]
        assert deepest.post.id == reply_a1a1.id

    @pytest.mark.asyncio
    async def test_orphaned_replies_are_excluded(self, unit_env):
        """Replies whose parent is missing should not appear anywhere."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user()

        root = make_post(author, "Root")
        orphan = make_post(author, "Orphan", parent_id=PostId(uuid4()), minutes=1)
        orphan_child = make_post(author, "Orphan child", parent_id=orphan.id, minutes=2)
        for post in (root, orphan, orphan_child):
            await post_repo.save(post)

        # Act
        tree = await post_service.build_forum_tree()

        # Assert
        assert _flatten(tree) == [root.id]

    @pytest.mark.asyncio
    async def test_reply_cycle_does_not_recurse_forever(self, unit_env):
        """Posts that reference each other as parents are unreachable from roots."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user()

        first_id = PostId(uuid4())
        second = make_post(author, "Second", parent_id=first_id, minutes=1)
        first = make_post(author, "First", parent_id=second.id).model_copy(
            update={"id": first_id}
        )
        root = make_post(author, "Root", minutes=2)
        for post in (first, second, root):
            await post_repo.save(post)

        # Act
        tree = await post_service.build_forum_tree()

        # Assert
        assert _flatten(tree) == [root.id]

    @pytest.mark.asyncio
    async def test_deep_reply_chain_is_built_without_recursion(self, unit_env):
        """Reply depth is unbounded; a long chain should nest in full."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user()
        depth = 5000
        chain = [make_post(author, "Root")]
        for level in range(1, depth + 1):
            parent_id = chain[-1].id
            chain.append(
                make_post(author, f"Level {level}", parent_id=parent_id, minutes=level)
            )
        for post in chain:
            await post_repo.save(post)

        # Act
        tree = await post_service.build_forum_tree()

        # Assert
        assert len(tree) == 1
        node = tree[0]
        for expected in chain[1:]:
            assert len(node.replies) == 1
            node = node.replies[0]
            assert node.post.id == expected.id
        assert node.replies == []


class TestCreatePost:
    """Tests for create_post method."""

    @pytest.mark.asyncio
    async def test_create_root_post(self, unit_env):
        """A new post should start with no likes and snapshot the author's name."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user(name="Chef Ana")

        # Act
        post = await post_service.create_post(
            author=author,
            title="Sourdough starter",
            content="Feed it daily.",
            category=PostCategory.RECIPE,
        )

        # Assert
        assert post.author_id == author.id
        assert post.author_name == "Chef Ana"
        assert post.liker_ids == []
        assert post.parent_id is None
        assert post.created_at == post.updated_at
        assert post.created_at.tzinfo is not None
        assert await post_repo.find_by_id(post.id) == post

    @pytest.mark.asyncio
    async def test_author_name_falls_back_to_email(self, unit_env):
        """Authors without a name should be shown by email."""
        post_service = await unit_env.get(PostService)
        author = make_user(name=None, email="cook@example.com")

        post = await post_service.create_post(
            author=author,
            title="Question",
            content="How long to rest dough?",
            category=PostCategory.QUESTION,
        )

        assert post.author_name == "cook@example.com"

    @pytest.mark.asyncio
    async def test_create_reply_with_unknown_parent_is_stored(self, unit_env):
        """Parent existence is not checked; the reply is stored as given."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        parent_id = PostId(uuid4())

        # Act
        reply = await post_service.create_post(
            author=make_user(),
            title="Re: nothing",
            content="Replying into the void",
            category=PostCategory.TIPS,
            parent_id=parent_id,
        )

        # Assert
        saved = await post_repo.find_by_id(reply.id)
        assert saved is not None
        assert saved.parent_id == parent_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title,content,message",
        [
            ("   ", "Body", "Title cannot be empty"),
            ("Title", "\n\t ", "Content cannot be empty"),
        ],
    )
    async def test_blank_text_is_rejected(self, unit_env, title, content, message):
        """Whitespace-only title or content should be refused like on edit."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)

        # Act / Assert
        with pytest.raises(ValidationError, match=message):
            await post_service.create_post(
                author=make_user(),
                title=title,
                content=content,
                category=PostCategory.TIPS,
            )
        assert await post_repo.find_all() == []


class TestEditPost:
    """Tests for edit_post method."""

    @pytest.mark.asyncio
    async def test_edit_content_only_keeps_title(self, unit_env):
        """Omitted fields should keep their stored values."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user()
        post = make_post(author, "Original title")
        await post_repo.save(post)

        # Act
        result = await post_service.edit_post(
            post_id=post.id, user_id=author.id, content="New content"
        )

        # Assert
        assert result.title == "Original title"
        assert result.content == "New content"
        assert result.updated_at > post.updated_at
        assert result.created_at == post.created_at

        saved = await post_repo.find_by_id(post.id)
        assert saved.content == "New content"

    @pytest.mark.asyncio
    async def test_edit_title_only_keeps_content(self, unit_env):
        """Editing just the title should leave content untouched."""
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user()
        post = make_post(author, "Original title")
        await post_repo.save(post)

        result = await post_service.edit_post(
            post_id=post.id, user_id=author.id, title="Better title"
        )

        assert result.title == "Better title"
        assert result.content == post.content

    @pytest.mark.asyncio
    async def test_edit_by_non_author_is_rejected(self, unit_env):
        """Only the author may edit, and the stored post stays unchanged."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user()
        post = make_post(author)
        await post_repo.save(post)

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await post_service.edit_post(
                post_id=post.id, user_id=make_user().id, title="Hijacked"
            )

        assert await post_repo.find_by_id(post.id) == post

    @pytest.mark.asyncio
    async def test_edit_missing_post_raises_not_found(self, unit_env):
        """Editing a post that doesn't exist should raise NotFoundError."""
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await post_service.edit_post(
                post_id=PostId(uuid4()), user_id=make_user().id, title="Anything"
            )

    @pytest.mark.asyncio
    async def test_edit_with_blank_title_is_rejected(self, unit_env):
        """A supplied title must not be blank."""
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user()
        post = make_post(author)
        await post_repo.save(post)

        with pytest.raises(ValidationError, match="Title cannot be empty"):
            await post_service.edit_post(
                post_id=post.id, user_id=author.id, title="   "
            )

    @pytest.mark.asyncio
    async def test_edit_keeps_like_toggled_after_read(self):
        """A like landing between the edit's read and write must survive."""
        # Arrange
        author = make_user()
        liker = make_user()
        post = make_post(author, "Original title")
        post_repo = LikeDuringReadRepository(liker_id=liker.id)
        await post_repo.save(post)
        post_service = PostService(post_repository=post_repo)

        # Act
        result = await post_service.edit_post(
            post_id=post.id, user_id=author.id, title="Edited title"
        )

        # Assert
        assert result.title == "Edited title"
        assert result.liker_ids == [liker.id]
        saved = await post_repo.find_by_id(post.id)
        assert saved.liker_ids == [liker.id]


class TestDeletePost:
    """Tests for delete_post method."""

    @pytest.mark.asyncio
    async def test_delete_keeps_replies(self, unit_env):
        """Deleting a parent should not cascade to its replies."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user()
        parent = make_post(author, "Parent")
        reply = make_post(make_user(), "Reply", parent_id=parent.id, minutes=1)
        await post_repo.save(parent)
        await post_repo.save(reply)

        # Act
        await post_service.delete_post(post_id=parent.id, user_id=author.id)

        # Assert
        assert await post_repo.find_by_id(parent.id) is None
        assert await post_repo.find_by_id(reply.id) == reply
        assert await post_service.build_forum_tree() == []

    @pytest.mark.asyncio
    async def test_delete_by_non_author_is_rejected(self, unit_env):
        """Only the author may delete."""
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        post = make_post(make_user())
        await post_repo.save(post)

        with pytest.raises(NotAuthorizedError):
            await post_service.delete_post(post_id=post.id, user_id=make_user().id)

        assert await post_repo.find_by_id(post.id) is not None

    @pytest.mark.asyncio
    async def test_delete_missing_post_raises_not_found(self, unit_env):
        """Deleting a post that doesn't exist should raise NotFoundError."""
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await post_service.delete_post(
                post_id=PostId(uuid4()), user_id=make_user().id
            )


class TestToggleLike:
    """Tests for toggle_like method."""

    @pytest.mark.asyncio
    async def test_toggle_adds_then_removes_like(self, unit_env):
        """Two toggles by the same user should restore the original like set."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        existing_liker = make_user()
        post = make_post(make_user(), liker_ids=[existing_liker.id])
        await post_repo.save(post)
        user = make_user()

        # Act
        after_first = await post_service.toggle_like(post.id, user.id)
        after_second = await post_service.toggle_like(post.id, user.id)

        # Assert
        assert after_first == [existing_liker.id, user.id]
        assert after_second == [existing_liker.id]

    @pytest.mark.asyncio
    async def test_author_may_like_own_post(self, unit_env):
        """There is no self-like restriction."""
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user()
        post = make_post(author)
        await post_repo.save(post)

        likes = await post_service.toggle_like(post.id, author.id)

        assert likes == [author.id]

    @pytest.mark.asyncio
    async def test_like_set_never_holds_duplicates(self, unit_env):
        """Toggling repeatedly should never list a user twice."""
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        post = make_post(make_user())
        await post_repo.save(post)
        user = make_user()

        for _ in range(5):
            likes = await post_service.toggle_like(post.id, user.id)
            assert likes.count(user.id) <= 1

        assert likes == [user.id]

    @pytest.mark.asyncio
    async def test_like_missing_post_raises_not_found(self, unit_env):
        """Liking a post that doesn't exist should raise NotFoundError."""
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await post_service.toggle_like(PostId(uuid4()), make_user().id)

    @pytest.mark.asyncio
    async def test_concurrent_likes_from_different_users_all_land(self, unit_env):
        """Likes toggled together by many users should none of them be lost."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        post = make_post(make_user())
        await post_repo.save(post)
        users = [make_user(f"Cook {i}") for i in range(25)]

        # Act
        await asyncio.gather(
            *(post_service.toggle_like(post.id, user.id) for user in users)
        )

        # Assert
        stored = await post_repo.find_by_id(post.id)
        assert sorted(stored.liker_ids) == sorted(user.id for user in users)
        assert len(set(stored.liker_ids)) == len(users)
