"""Domain value objects for the forum."""

from mealtalk.domain.value.identifiers import PostId, UserId
from mealtalk.domain.value.types import PostCategory

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    # Types
    "PostCategory",
]
