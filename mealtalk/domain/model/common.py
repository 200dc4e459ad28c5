"""Shared base for forum entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable entity base.

    Entities are never mutated in place; services build changed copies with
    ``model_copy`` and hand them back to a repository.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
