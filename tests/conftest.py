"""Test configuration and fixtures."""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

import logfire

from pal.domain.model import Interest, Match, User
from pal.domain.value import (
    InterestId,
    InterestName,
    MatchId,
    MatchStatus,
    SocialStyle,
    UserId,
)

# Keep spans local; nothing is exported during tests
logfire.configure(send_to_logfire=False, console=False)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_user(
    name: str = "Alex",
    interests: Optional[list[str]] = None,
    user_id: Optional[UserId] = None,
    **fields,
) -> User:
    """Build a valid user with sensible defaults."""
    defaults = dict(
        social_style=SocialStyle.AMBIVERT,
        super_likes_remaining=1,
        last_reset_date=NOW.date(),
        last_active=NOW,
        created_at=NOW,
        updated_at=NOW,
    )
    defaults.update(fields)
    return User(
        id=user_id or UserId(uuid4()),
        name=name,
        interests=[
            Interest(id=InterestId(uuid4()), name=InterestName(n))
            for n in interests or []
        ],
        **defaults,
    )


def make_match(
    initiator_id: UserId,
    target_id: UserId,
    status: MatchStatus = MatchStatus.PENDING,
    **fields,
) -> Match:
    """Build a match between two users."""
    defaults = dict(created_at=NOW, updated_at=NOW)
    defaults.update(fields)
    return Match(
        id=MatchId(uuid4()),
        initiator_id=initiator_id,
        target_id=target_id,
        status=status,
        **defaults,
    )
