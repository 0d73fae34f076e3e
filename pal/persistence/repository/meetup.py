"""PostgreSQL implementation of MeetupInvite repository."""

from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pal.domain.model import MeetupInvite
from pal.domain.repository import MeetupInviteRepository
from pal.domain.value import MeetupInviteId, UserId
from pal.persistence.database import translate_upstream_errors
from pal.persistence.mappers import meetup_invite_to_dict, row_to_meetup_invite
from pal.persistence.tables import meetup_invites_table


class PostgresMeetupInviteRepository(MeetupInviteRepository):
    """PostgreSQL implementation of MeetupInviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @translate_upstream_errors
    async def find_by_id(self, invite_id: MeetupInviteId) -> Optional[MeetupInvite]:
        stmt = select(meetup_invites_table).where(
            meetup_invites_table.c.id == invite_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_meetup_invite(dict(row)) if row else None

    @translate_upstream_errors
    async def find_by_sender(self, sender_id: UserId) -> list[MeetupInvite]:
        stmt = (
            select(meetup_invites_table)
            .where(meetup_invites_table.c.sender_id == sender_id)
            .order_by(meetup_invites_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_meetup_invite(dict(row)) for row in result.mappings().all()]

    @translate_upstream_errors
    async def find_by_receiver(self, receiver_id: UserId) -> list[MeetupInvite]:
        stmt = (
            select(meetup_invites_table)
            .where(meetup_invites_table.c.receiver_id == receiver_id)
            .order_by(meetup_invites_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_meetup_invite(dict(row)) for row in result.mappings().all()]

    @translate_upstream_errors
    async def save(self, invite: MeetupInvite) -> MeetupInvite:
        stmt = insert(meetup_invites_table).values(**meetup_invite_to_dict(invite))
        await self.session.execute(stmt)
        await self.session.flush()
        return invite

    @translate_upstream_errors
    async def compare_and_swap(
        self, invite: MeetupInvite, expected_revision: int
    ) -> bool:
        values = meetup_invite_to_dict(invite)
        values.pop("id")
        stmt = (
            update(meetup_invites_table)
            .where(
                and_(
                    meetup_invites_table.c.id == invite.id,
                    meetup_invites_table.c.revision == expected_revision,
                )
            )
            .values(**values)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1  # type: ignore[attr-defined]
