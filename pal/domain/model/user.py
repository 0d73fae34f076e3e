"""User aggregate root.

Users complete onboarding (profile, interests, social style) and may upgrade
to premium. The aggregate also carries the daily super-like quota counters.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field, model_validator

from pal.domain.model.common import DomainModel
from pal.domain.value import InterestId, InterestName, SocialStyle, UserId
from pal.util.clock import utc_now


class Interest(DomainModel):
    """A named interest on a user's profile."""

    id: InterestId
    name: InterestName


class User(DomainModel):
    """User aggregate root.

    Profile text is canonicalised to two optional fields:
    - headline: one-line summary shown on cards
    - about_me: long-form text (legacy ``bio`` values are mapped here)

    Business rules:
    - Interest names are unique per user (case-insensitive)
    - super_likes_remaining never goes negative
    """

    id: UserId
    name: str = Field(min_length=1, max_length=100)
    email: Optional[str] = None
    gender: list[str] = []
    looking_to_meet: list[str] = []
    social_style: SocialStyle = SocialStyle.AMBIVERT
    interests: list[Interest] = []
    headline: Optional[str] = Field(default=None, max_length=150)
    about_me: Optional[str] = Field(default=None, max_length=2000)
    profile_picture: Optional[str] = None
    verified: bool = False
    is_premium: bool = False
    super_likes_remaining: int = Field(default=1, ge=0)
    last_reset_date: Optional[date] = None
    last_active: datetime = Field(default_factory=utc_now)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_unique_interests(self) -> "User":
        """Reject duplicate interest names."""
        keys = [interest.name.key for interest in self.interests]
        if len(keys) != len(set(keys)):
            raise ValueError("Interest names must be unique per user")
        return self

    @property
    def display_about(self) -> str:
        """Long profile text with fallback: about_me, then headline."""
        return self.about_me or self.headline or ""

    @property
    def interest_keys(self) -> set[str]:
        return {interest.name.key for interest in self.interests}
