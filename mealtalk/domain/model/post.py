"""Post aggregate root.

Posts are the only content type in the community forum. A post with no
parent is a root; any other post is a reply in its parent's thread.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from mealtalk.domain.model.common import DomainModel
from mealtalk.domain.value import PostCategory, PostId, UserId


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class Post(DomainModel):
    """Post aggregate root.

    Ownership is fixed by ``author_id``. ``author_name`` is a snapshot taken
    at creation and is not re-synced when the author renames.
    ``parent_id`` is not verified against the store, so a reply can outlive
    its parent (an orphan).
    """

    id: PostId
    author_id: UserId
    author_name: str = Field(min_length=1, max_length=255)
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)
    category: PostCategory
    liker_ids: list[UserId] = Field(default_factory=list)
    parent_id: Optional[PostId] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("liker_ids")
    @classmethod
    def validate_unique_likers(cls, v: list[UserId]) -> list[UserId]:
        """Each user may appear in the like set at most once."""
        if len(set(v)) != len(v):
            raise ValueError("A user can like a post only once")
        return v

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def is_authored_by(self, user_id: UserId) -> bool:
        return self.author_id == user_id

    def with_like_toggled(self, user_id: UserId) -> "Post":
        """Return a copy with ``user_id`` removed from or added to the likers."""
        if user_id in self.liker_ids:
            likers = [liker for liker in self.liker_ids if liker != user_id]
        else:
            likers = [*self.liker_ids, user_id]
        return self.model_copy(update={"liker_ids": likers})
