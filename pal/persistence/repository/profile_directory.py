"""PostgreSQL implementation of ProfileDirectory.

Long-lived callers (notification relays) outlive request sessions, so every
lookup opens its own short session from the factory.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pal.domain.repository import ProfileDirectory
from pal.domain.value import MatchId, UserId
from pal.persistence.database import read_session, translate_upstream_errors
from pal.persistence.tables import matches_table, users_table


class PostgresProfileDirectory(ProfileDirectory):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @translate_upstream_errors
    async def get_display_name(self, user_id: UserId) -> Optional[str]:
        async with read_session(self.session_factory) as session:
            result = await session.execute(
                select(users_table.c.name).where(users_table.c.id == user_id)
            )
            return result.scalar_one_or_none()

    @translate_upstream_errors
    async def get_match_participants(
        self, match_id: MatchId
    ) -> Optional[tuple[UserId, UserId]]:
        async with read_session(self.session_factory) as session:
            result = await session.execute(
                select(matches_table.c.initiator_id, matches_table.c.target_id).where(
                    matches_table.c.id == match_id
                )
            )
            row = result.first()
            if not row:
                return None
            return UserId(row.initiator_id), UserId(row.target_id)
