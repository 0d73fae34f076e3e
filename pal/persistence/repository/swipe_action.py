"""PostgreSQL implementation of SwipeAction repository."""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from pal.domain.model import SwipeAction
from pal.domain.repository import SwipeActionRepository
from pal.domain.value import UserId
from pal.persistence.database import translate_upstream_errors
from pal.persistence.mappers import row_to_swipe_action, swipe_action_to_dict
from pal.persistence.tables import swipe_actions_table


class PostgresSwipeActionRepository(SwipeActionRepository):
    """PostgreSQL implementation of SwipeActionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @translate_upstream_errors
    async def find_last(self, user_id: UserId) -> Optional[SwipeAction]:
        stmt = select(swipe_actions_table).where(
            swipe_actions_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_swipe_action(dict(row)) if row else None

    @translate_upstream_errors
    async def record(self, action: SwipeAction) -> SwipeAction:
        """Upsert on user_id so only the latest action is kept."""
        values = swipe_action_to_dict(action)
        stmt = insert(swipe_actions_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[swipe_actions_table.c.user_id],
            set_={
                "match_id": stmt.excluded.match_id,
                "decision": stmt.excluded.decision,
                "performed_at": stmt.excluded.performed_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return action

    @translate_upstream_errors
    async def clear(self, user_id: UserId) -> None:
        stmt = delete(swipe_actions_table).where(
            swipe_actions_table.c.user_id == user_id
        )
        await self.session.execute(stmt)
        await self.session.flush()
