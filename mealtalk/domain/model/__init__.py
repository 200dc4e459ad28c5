"""Domain model entities for the forum."""

from mealtalk.domain.model.post import Post
from mealtalk.domain.model.user import User

__all__ = [
    "User",
    "Post",
]
