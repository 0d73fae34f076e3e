"""Shared base for users, matches, messages, invites and notifications."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable entity. State changes go through ``model_copy(update=...)``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
