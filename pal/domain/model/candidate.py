"""Candidate read model for browsing other users."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pal.domain.model.common import DomainModel
from pal.domain.value import SocialStyle, UserId


class Candidate(DomainModel):
    """Another user as seen by the viewer while browsing."""

    user_id: UserId
    name: str
    gender: list[str] = []
    social_style: SocialStyle
    interests: list[str] = []
    headline: Optional[str] = None
    about: str = ""
    profile_picture: Optional[str] = None
    compatibility_score: int = Field(ge=0, le=100)
    last_active: datetime
