"""Unit tests for change payload translation."""

from uuid import uuid4

import pytest

from pal.adapter.error import PayloadTranslationError
from pal.adapter.realtime import translate_payload
from pal.domain.model import (
    MatchInserted,
    MatchUpdated,
    MeetupInviteUpdated,
    MessageInserted,
    RowDeleted,
)
from pal.domain.value import MatchStatus, MeetupStatus, StoreTable

TS = "2025-06-01T12:00:00+00:00"


def _match_row(**overrides):
    row = {
        "id": str(uuid4()),
        "initiator_id": str(uuid4()),
        "target_id": str(uuid4()),
        "status": "pending",
        "is_super_like": False,
        "revision": 0,
        "retracted_at": None,
        "created_at": TS,
        "updated_at": TS,
    }
    row.update(overrides)
    return row


def _invite_row(**overrides):
    row = {
        "id": str(uuid4()),
        "match_id": str(uuid4()),
        "sender_id": str(uuid4()),
        "receiver_id": str(uuid4()),
        "place": {"name": "Park", "address": "Main St", "category": "park"},
        "datetime": "2025-06-07T10:00:00+00:00",
        "proposed_datetime": None,
        "message": None,
        "status": "pending",
        "revision": 0,
        "created_at": TS,
        "updated_at": TS,
    }
    row.update(overrides)
    return row


class TestTranslatePayload:
    """Tests for translate_payload."""

    def test_match_insert(self):
        row = _match_row(is_super_like=True)
        event = translate_payload({"table": "matches", "type": "INSERT", "record": row})
        assert isinstance(event, MatchInserted)
        assert str(event.match.id) == row["id"]
        assert event.match.is_super_like is True

    def test_legacy_match_columns_are_mapped(self):
        """user1_id/user2_id rows become initiator/target."""
        row = _match_row()
        row["user1_id"] = row.pop("initiator_id")
        row["user2_id"] = row.pop("target_id")
        del row["revision"]

        event = translate_payload({"table": "matches", "type": "INSERT", "record": row})

        assert str(event.match.initiator_id) == row["user1_id"]
        assert str(event.match.target_id) == row["user2_id"]
        assert event.match.revision == 0

    def test_match_update_carries_previous(self):
        old = _match_row()
        new = dict(old, status="accepted", revision=1)
        event = translate_payload(
            {"table": "matches", "type": "UPDATE", "record": new, "old_record": old}
        )
        assert isinstance(event, MatchUpdated)
        assert event.match.status == MatchStatus.ACCEPTED
        assert event.previous.status == MatchStatus.PENDING

    def test_message_insert(self):
        row = {
            "id": str(uuid4()),
            "match_id": str(uuid4()),
            "sender_id": str(uuid4()),
            "content": "hi",
            "is_read": False,
            "created_at": TS,
        }
        event = translate_payload({"table": "messages", "type": "INSERT", "record": row})
        assert isinstance(event, MessageInserted)
        assert event.message.content == "hi"

    def test_meetup_update_maps_datetime_columns(self):
        old = _invite_row()
        new = dict(
            old,
            status="proposed_change",
            proposed_datetime="2025-06-08T10:00:00+00:00",
            revision=1,
        )
        event = translate_payload(
            {
                "table": "meetup_invites",
                "type": "UPDATE",
                "record": new,
                "old_record": old,
            }
        )
        assert isinstance(event, MeetupInviteUpdated)
        assert event.invite.status == MeetupStatus.PROPOSED_CHANGE
        assert event.invite.proposed_at.day == 8
        assert event.invite.scheduled_at.day == 7
        assert event.previous.status == MeetupStatus.PENDING

    def test_update_without_old_record(self):
        event = translate_payload(
            {"table": "matches", "type": "UPDATE", "record": _match_row()}
        )
        assert event.previous is None

    def test_delete_becomes_row_deleted(self):
        row_id = str(uuid4())
        event = translate_payload(
            {"table": "messages", "type": "DELETE", "old_record": {"id": row_id}}
        )
        assert isinstance(event, RowDeleted)
        assert event.table == StoreTable.MESSAGES
        assert event.row_id == row_id

    def test_delete_without_id_fails(self):
        with pytest.raises(PayloadTranslationError):
            translate_payload({"table": "matches", "type": "DELETE", "old_record": {}})

    def test_unknown_table_fails(self):
        with pytest.raises(PayloadTranslationError):
            translate_payload({"table": "likes", "type": "INSERT", "record": {}})

    def test_invalid_row_fails(self):
        with pytest.raises(PayloadTranslationError):
            translate_payload(
                {"table": "matches", "type": "INSERT", "record": {"id": "nope"}}
            )

    def test_users_table_has_no_event(self):
        with pytest.raises(PayloadTranslationError):
            translate_payload(
                {"table": "users", "type": "INSERT", "record": {"id": str(uuid4())}}
            )
