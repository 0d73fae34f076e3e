"""PostgreSQL implementation of Message repository."""

from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pal.domain.model import Message
from pal.domain.repository import MessageRepository
from pal.domain.value import MatchId, MessageId, UserId
from pal.persistence.database import translate_upstream_errors
from pal.persistence.mappers import message_to_dict, row_to_message
from pal.persistence.tables import messages_table


class PostgresMessageRepository(MessageRepository):
    """PostgreSQL implementation of MessageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @translate_upstream_errors
    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        stmt = select(messages_table).where(messages_table.c.id == message_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_message(dict(row)) if row else None

    @translate_upstream_errors
    async def find_by_match(self, match_id: MatchId) -> list[Message]:
        stmt = (
            select(messages_table)
            .where(messages_table.c.match_id == match_id)
            .order_by(messages_table.c.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_message(dict(row)) for row in result.mappings().all()]

    @translate_upstream_errors
    async def find_latest(self, match_id: MatchId) -> Optional[Message]:
        stmt = (
            select(messages_table)
            .where(messages_table.c.match_id == match_id)
            .order_by(messages_table.c.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_message(dict(row)) if row else None

    @translate_upstream_errors
    async def count_unread(self, match_id: MatchId, reader_id: UserId) -> int:
        stmt = select(func.count()).where(
            and_(
                messages_table.c.match_id == match_id,
                messages_table.c.sender_id != reader_id,
                messages_table.c.is_read.is_(False),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    @translate_upstream_errors
    async def save(self, message: Message) -> Message:
        """Save a message (create or update).

        Only the read flag changes after creation.
        """
        existing = await self.find_by_id(message.id)
        if existing:
            stmt = (
                messages_table.update()
                .where(messages_table.c.id == message.id)
                .values(is_read=message.is_read)
            )
        else:
            stmt = messages_table.insert().values(**message_to_dict(message))
        await self.session.execute(stmt)
        await self.session.flush()
        return message
