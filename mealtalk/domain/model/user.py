"""User aggregate root.

Accounts are owned by the authentication service; the forum only reads them
to snapshot an author's display name.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from mealtalk.domain.model.common import DomainModel
from mealtalk.domain.model.post import utcnow
from mealtalk.domain.value import UserId


class User(DomainModel):
    """User account as seen by the forum."""

    id: UserId
    email: str = Field(min_length=3, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def display_name(self) -> str:
        """Name shown on forum posts, falling back to the email address."""
        return self.name or self.email
