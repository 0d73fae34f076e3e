"""Unit tests for domain model invariants."""

from datetime import timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from pal.domain.model import Match, MeetupInvite, Message, SessionContext, User
from pal.domain.value import (
    InterestName,
    MatchId,
    MatchStatus,
    MeetupInviteId,
    MeetupStatus,
    MessageId,
    Place,
    UserId,
)
from tests.conftest import NOW, make_match, make_user


def _invite(**fields) -> MeetupInvite:
    return MeetupInvite(
        id=MeetupInviteId(uuid4()),
        match_id=MatchId(uuid4()),
        sender_id=UserId(uuid4()),
        receiver_id=UserId(uuid4()),
        place=Place(name="Park", address="Main St", category="park"),
        scheduled_at=NOW + timedelta(days=1),
        **fields,
    )


class TestUser:
    def test_interest_names_unique_case_insensitive(self):
        with pytest.raises(ValidationError):
            make_user("Alex", interests=["Chess", "CHESS"])

    def test_super_likes_never_negative(self):
        with pytest.raises(ValidationError):
            make_user("Alex", super_likes_remaining=-1)

    def test_display_about_falls_back_to_headline(self):
        assert make_user("Alex", headline="Hi").display_about == "Hi"
        assert make_user("Alex").display_about == ""

    def test_interest_name_is_stripped(self):
        assert InterestName("  hiking ").root == "hiking"
        with pytest.raises(ValidationError):
            InterestName("   ")

    def test_default_timestamps_are_utc_aware(self):
        user = User(id=UserId(uuid4()), name="Alex")

        assert user.last_active.tzinfo is not None
        assert user.created_at.utcoffset() == timedelta(0)
        # Mixing defaults with clock and database values must stay comparable
        assert sorted([user.last_active, NOW])[0] == NOW


class TestMatch:
    def test_active_states(self):
        a, b = UserId(uuid4()), UserId(uuid4())
        assert make_match(a, b).is_active
        assert make_match(a, b, MatchStatus.ACCEPTED).is_active
        assert not make_match(a, b, MatchStatus.DECLINED).is_active
        assert not make_match(a, b, retracted_at=NOW).is_active

    def test_other_party(self):
        a, b = UserId(uuid4()), UserId(uuid4())
        match = make_match(a, b)
        assert match.other_party(a) == b
        assert match.other_party(b) == a


class TestMeetupInvite:
    def test_proposed_change_requires_proposed_at(self):
        with pytest.raises(ValidationError):
            _invite(status=MeetupStatus.PROPOSED_CHANGE)

    def test_proposed_at_only_with_proposed_change(self):
        with pytest.raises(ValidationError):
            _invite(proposed_at=NOW + timedelta(days=2))

    def test_valid_proposal(self):
        invite = _invite(
            status=MeetupStatus.PROPOSED_CHANGE, proposed_at=NOW + timedelta(days=2)
        )
        assert invite.status == MeetupStatus.PROPOSED_CHANGE
        assert MeetupStatus.ACCEPTED.is_terminal
        assert not MeetupStatus.PROPOSED_CHANGE.is_terminal


class TestMessage:
    def test_content_length(self):
        with pytest.raises(ValidationError):
            Message(
                id=MessageId(uuid4()),
                match_id=MatchId(uuid4()),
                sender_id=UserId(uuid4()),
                content="",
            )


class TestDefaults:
    def test_every_default_timestamp_is_aware(self):
        match = Match(
            id=MatchId(uuid4()), initiator_id=UserId(uuid4()), target_id=UserId(uuid4())
        )
        session = SessionContext(user_id=UserId(uuid4()))

        for value in (match.created_at, match.updated_at, session.started_at):
            assert value.utcoffset() == timedelta(0)
