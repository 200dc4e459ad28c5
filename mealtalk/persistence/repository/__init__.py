"""PostgreSQL repository implementations."""

from mealtalk.persistence.repository.post import PostgresPostRepository
from mealtalk.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresPostRepository",
]
