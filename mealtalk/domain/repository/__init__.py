"""Repository interfaces for the forum domain.

Interfaces live in the domain layer; implementations live in persistence.
"""

from mealtalk.domain.repository.post import PostRepository
from mealtalk.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "PostRepository",
]
