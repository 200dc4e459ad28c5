"""Strongly typed identifiers for forum entities.

Using NewType prevents mixing up post and user ids in signatures.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
