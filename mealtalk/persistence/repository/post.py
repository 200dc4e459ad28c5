"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import List, Optional

import logfire
from sqlalchemy import any_, case, delete, func, literal, select, update
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import UUID, insert
from sqlalchemy.ext.asyncio import AsyncSession

from mealtalk.domain.model import Post
from mealtalk.domain.repository import PostRepository
from mealtalk.domain.value import PostId, UserId
from mealtalk.persistence.mappers import post_to_dict, row_to_post
from mealtalk.persistence.tables import forum_posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(forum_posts_table).where(forum_posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            return row_to_post(dict(row)) if row else None

    async def find_all(self) -> List[Post]:
        """Fetch every post."""
        with logfire.span("post_repository.find_all"):
            result = await self.session.execute(select(forum_posts_table))
            return [row_to_post(dict(row)) for row in result.mappings().all()]

    async def save(self, post: Post) -> Post:
        """Save a post (create or update) as a single upsert."""
        with logfire.span("post_repository.save", post_id=str(post.id)):
            post_dict = post_to_dict(post)
            stmt = insert(forum_posts_table).values(**post_dict)
            stmt = stmt.on_conflict_do_update(
                index_elements=[forum_posts_table.c.id],
                set_={
                    key: value for key, value in post_dict.items() if key != "id"
                },
            )
            await self.session.execute(stmt)
            await self.session.flush()
            return post

    async def update_content(
        self,
        post_id: PostId,
        updated_at: datetime,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Optional[Post]:
        """Update title/content in place, leaving the like set untouched."""
        with logfire.span("post_repository.update_content", post_id=str(post_id)):
            values: dict[str, object] = {"updated_at": updated_at}
            if title is not None:
                values["title"] = title
            if content is not None:
                values["content"] = content

            stmt = (
                update(forum_posts_table)
                .where(forum_posts_table.c.id == post_id)
                .values(**values)
                .returning(forum_posts_table)
            )
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            await self.session.flush()
            return row_to_post(dict(row)) if row else None

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete)."""
        with logfire.span("post_repository.delete", post_id=str(post_id)):
            stmt = (
                delete(forum_posts_table)
                .where(forum_posts_table.c.id == post_id)
                .returning(forum_posts_table.c.id)
            )
            result = await self.session.execute(stmt)
            deleted = result.first() is not None
            await self.session.flush()
            return deleted

    async def toggle_like(
        self, post_id: PostId, user_id: UserId
    ) -> Optional[List[UserId]]:
        """Atomically toggle a like.

        Uses a single conditional UPDATE so that concurrent toggles by
        different users never lose each other's writes.
        """
        with logfire.span(
            "post_repository.toggle_like", post_id=str(post_id), user_id=str(user_id)
        ):
            likers = forum_posts_table.c.liker_ids
            liker = literal(user_id, type_=UUID)
            array_type = postgresql.ARRAY(UUID)

            stmt = (
                update(forum_posts_table)
                .where(forum_posts_table.c.id == post_id)
                .values(
                    liker_ids=case(
                        (
                            liker == any_(likers),
                            func.array_remove(likers, liker, type_=array_type),
                        ),
                        else_=func.array_append(likers, liker, type_=array_type),
                    )
                )
                .returning(likers)
            )
            result = await self.session.execute(stmt)
            row = result.first()
            await self.session.flush()

            if row is None:
                return None
            return [UserId(liker_id) for liker_id in row[0]]
