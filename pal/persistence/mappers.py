"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from datetime import date, datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from pal.domain.model import (
    CoupleLink,
    Interest,
    Match,
    MeetupInvite,
    Message,
    SwipeAction,
    User,
)
from pal.domain.value import (
    CoupleLinkId,
    InterestId,
    InterestName,
    MatchId,
    MatchStatus,
    MeetupInviteId,
    MeetupStatus,
    MessageId,
    Place,
    RelationshipStatus,
    SocialStyle,
    SwipeDecision,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value


def _date(value: Any) -> Optional[date]:
    if isinstance(value, str):
        return date.fromisoformat(value)
    return value


def _interest(value: Any) -> Interest:
    # Older rows stored interests as plain names
    if isinstance(value, str):
        return Interest(id=InterestId(uuid4()), name=InterestName(value))
    return Interest(id=InterestId(_uuid(value["id"])), name=InterestName(value["name"]))


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Legacy ``bio`` fills ``about_me`` when the latter is empty.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        name=row["name"],
        email=row.get("email"),
        gender=list(row.get("gender") or []),
        looking_to_meet=list(row.get("looking_to_meet") or []),
        social_style=SocialStyle(row.get("social_style") or SocialStyle.AMBIVERT),
        interests=[_interest(i) for i in row.get("interests") or []],
        headline=row.get("headline"),
        about_me=row.get("about_me") or row.get("bio"),
        profile_picture=row.get("profile_picture"),
        verified=bool(row.get("verified", False)),
        is_premium=bool(row.get("is_premium", False)),
        super_likes_remaining=row.get("super_likes_remaining", 1),
        last_reset_date=_date(row.get("last_reset_date")),
        last_active=_datetime(row["last_active"]),
        created_at=_datetime(row["created_at"]),
        updated_at=_datetime(row["updated_at"]),
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump(exclude={"interests"})
    data["social_style"] = user.social_style.value
    data["interests"] = [
        {"id": str(interest.id), "name": interest.name.root}
        for interest in user.interests
    ]
    return data


def row_to_match(row: Dict[str, Any]) -> Match:
    """Convert database row to Match domain model.

    Args:
        row: Database row as dict

    Returns:
        Match domain model
    """
    return Match(
        id=MatchId(_uuid(row["id"])),
        initiator_id=UserId(_uuid(row["initiator_id"])),
        target_id=UserId(_uuid(row["target_id"])),
        status=MatchStatus(row["status"]),
        is_super_like=bool(row.get("is_super_like", False)),
        revision=row.get("revision", 0),
        retracted_at=_datetime(row.get("retracted_at")),
        reopened_from=(
            MatchId(_uuid(row["reopened_from"]))
            if row.get("reopened_from")
            else None
        ),
        created_at=_datetime(row["created_at"]),
        updated_at=_datetime(row["updated_at"]),
    )


def match_to_dict(match: Match) -> Dict[str, Any]:
    data = match.model_dump()
    data["status"] = match.status.value
    return data


def row_to_message(row: Dict[str, Any]) -> Message:
    """Convert database row to Message domain model."""
    return Message(
        id=MessageId(_uuid(row["id"])),
        match_id=MatchId(_uuid(row["match_id"])),
        sender_id=UserId(_uuid(row["sender_id"])),
        content=row["content"],
        is_read=bool(row.get("is_read", False)),
        created_at=_datetime(row["created_at"]),
    )


def message_to_dict(message: Message) -> Dict[str, Any]:
    return message.model_dump()


def row_to_meetup_invite(row: Dict[str, Any]) -> MeetupInvite:
    """Convert database row to MeetupInvite domain model.

    The ``datetime`` and ``proposed_datetime`` columns map to
    ``scheduled_at`` and ``proposed_at``.
    """
    return MeetupInvite(
        id=MeetupInviteId(_uuid(row["id"])),
        match_id=MatchId(_uuid(row["match_id"])),
        sender_id=UserId(_uuid(row["sender_id"])),
        receiver_id=UserId(_uuid(row["receiver_id"])),
        place=Place.model_validate(row["place"]),
        scheduled_at=_datetime(row["datetime"]),
        proposed_at=_datetime(row.get("proposed_datetime")),
        message=row.get("message"),
        status=MeetupStatus(row["status"]),
        revision=row.get("revision", 0),
        created_at=_datetime(row["created_at"]),
        updated_at=_datetime(row["updated_at"]),
    )


def meetup_invite_to_dict(invite: MeetupInvite) -> Dict[str, Any]:
    """Convert MeetupInvite domain model to database dict."""
    data = invite.model_dump(exclude={"scheduled_at", "proposed_at"})
    data["place"] = invite.place.model_dump()
    data["status"] = invite.status.value
    data["datetime"] = invite.scheduled_at
    data["proposed_datetime"] = invite.proposed_at
    return data


def row_to_swipe_action(row: Dict[str, Any]) -> SwipeAction:
    return SwipeAction(
        user_id=UserId(_uuid(row["user_id"])),
        match_id=MatchId(_uuid(row["match_id"])),
        decision=SwipeDecision(row["decision"]),
        performed_at=_datetime(row["performed_at"]),
    )


def swipe_action_to_dict(action: SwipeAction) -> Dict[str, Any]:
    data = action.model_dump()
    data["decision"] = action.decision.value
    return data


def row_to_couple_link(row: Dict[str, Any]) -> CoupleLink:
    return CoupleLink(
        id=CoupleLinkId(_uuid(row["id"])),
        requester_id=UserId(_uuid(row["requester_id"])),
        partner_id=UserId(_uuid(row["partner_id"])),
        relationship=RelationshipStatus(row["relationship"]),
        confirmed=bool(row["confirmed"]),
        linked_at=_datetime(row.get("linked_at")),
        revision=row.get("revision", 0),
        created_at=_datetime(row["created_at"]),
        updated_at=_datetime(row["updated_at"]),
    )


def couple_link_to_dict(link: CoupleLink) -> Dict[str, Any]:
    data = link.model_dump()
    data["relationship"] = link.relationship.value
    return data
