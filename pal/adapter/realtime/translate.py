"""Translation of raw change payloads into domain change events.

The store emits ``{"table", "type", "record", "old_record"}`` objects. Row
shapes are external: legacy column names are mapped here so nothing outside
this module needs to know them.
"""

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from pal.adapter.error import PayloadTranslationError
from pal.domain.model import (
    ChangeEvent,
    Match,
    MatchInserted,
    MatchUpdated,
    MeetupInvite,
    MeetupInviteInserted,
    MeetupInviteUpdated,
    Message,
    MessageInserted,
    MessageUpdated,
    RowDeleted,
)
from pal.domain.value import ChangeType, StoreTable

# Legacy column name -> model field
_MATCH_COLUMNS = {"user1_id": "initiator_id", "user2_id": "target_id"}
_MEETUP_COLUMNS = {"datetime": "scheduled_at", "proposed_datetime": "proposed_at"}


def _rename(record: dict[str, Any], columns: dict[str, str]) -> dict[str, Any]:
    data = dict(record)
    for column, field in columns.items():
        if column in data and field not in data:
            data[field] = data.pop(column)
    return data


def _match(record: dict[str, Any]) -> Match:
    data = _rename(record, _MATCH_COLUMNS)
    data.setdefault("revision", 0)
    return Match.model_validate(data)


def _message(record: dict[str, Any]) -> Message:
    return Message.model_validate(record)


def _invite(record: dict[str, Any]) -> MeetupInvite:
    data = _rename(record, _MEETUP_COLUMNS)
    data.setdefault("revision", 0)
    return MeetupInvite.model_validate(data)


def _optional(parse, record: Optional[dict[str, Any]]):
    # UPDATE payloads may omit the old row (replica identity default)
    if not record:
        return None
    try:
        return parse(record)
    except PydanticValidationError:
        return None


def translate_payload(payload: dict[str, Any]) -> ChangeEvent:
    """Map one raw change payload to exactly one ChangeEvent variant.

    Args:
        payload: Decoded notification payload

    Returns:
        The corresponding domain event

    Raises:
        PayloadTranslationError: If the payload shape is unknown or invalid
    """
    try:
        table = StoreTable(payload["table"])
        change_type = ChangeType(payload["type"])
    except (KeyError, TypeError, ValueError) as e:
        raise PayloadTranslationError(f"Unrecognised change payload: {e}") from e

    record = payload.get("record") or {}
    old_record = payload.get("old_record")

    try:
        if change_type == ChangeType.DELETE:
            row = old_record or record
            if "id" not in row:
                raise PayloadTranslationError(
                    f"DELETE on {table.value} without row id"
                )
            return RowDeleted(table=table, row_id=str(row["id"]))

        if table == StoreTable.MATCHES:
            if change_type == ChangeType.INSERT:
                return MatchInserted(match=_match(record))
            return MatchUpdated(
                match=_match(record), previous=_optional(_match, old_record)
            )

        if table == StoreTable.MESSAGES:
            if change_type == ChangeType.INSERT:
                return MessageInserted(message=_message(record))
            return MessageUpdated(message=_message(record))

        if table == StoreTable.MEETUP_INVITES:
            if change_type == ChangeType.INSERT:
                return MeetupInviteInserted(invite=_invite(record))
            return MeetupInviteUpdated(
                invite=_invite(record), previous=_optional(_invite, old_record)
            )
    except PydanticValidationError as e:
        raise PayloadTranslationError(
            f"Invalid {table.value} row in {change_type.value} payload: {e}"
        ) from e

    raise PayloadTranslationError(
        f"No event for {change_type.value} on {table.value}"
    )
