"""PostgreSQL implementation of Match repository."""

from typing import Optional

from sqlalchemy import and_, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pal.domain.model import Match
from pal.domain.repository import MatchRepository
from pal.domain.value import MatchId, MatchStatus, UserId
from pal.persistence.database import translate_upstream_errors
from pal.persistence.mappers import match_to_dict, row_to_match
from pal.persistence.tables import matches_table


class PostgresMatchRepository(MatchRepository):
    """PostgreSQL implementation of MatchRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @translate_upstream_errors
    async def find_by_id(self, match_id: MatchId) -> Optional[Match]:
        """Find a match by ID."""
        stmt = select(matches_table).where(matches_table.c.id == match_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_match(dict(row)) if row else None

    @translate_upstream_errors
    async def find_active(
        self, initiator_id: UserId, target_id: UserId
    ) -> Optional[Match]:
        """Find the active match for one direction of a pair."""
        stmt = select(matches_table).where(
            and_(
                matches_table.c.initiator_id == initiator_id,
                matches_table.c.target_id == target_id,
                matches_table.c.status.in_(
                    [MatchStatus.PENDING.value, MatchStatus.ACCEPTED.value]
                ),
                matches_table.c.retracted_at.is_(None),
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_match(dict(row)) if row else None

    @translate_upstream_errors
    async def find_for_user(
        self, user_id: UserId, status: Optional[MatchStatus] = None
    ) -> list[Match]:
        """Find non-retracted matches involving a user, newest first."""
        stmt = select(matches_table).where(
            and_(
                or_(
                    matches_table.c.initiator_id == user_id,
                    matches_table.c.target_id == user_id,
                ),
                matches_table.c.retracted_at.is_(None),
            )
        )
        if status is not None:
            stmt = stmt.where(matches_table.c.status == status.value)
        stmt = stmt.order_by(matches_table.c.created_at.desc())

        result = await self.session.execute(stmt)
        return [row_to_match(dict(row)) for row in result.mappings().all()]

    @translate_upstream_errors
    async def save(self, match: Match) -> Match:
        """Insert a new match.

        Raises:
            IntegrityError: If an active match already exists for the pair
                (partial unique index)
        """
        stmt = insert(matches_table).values(**match_to_dict(match))
        # Savepoint keeps the request transaction usable after a conflict
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return match

    @translate_upstream_errors
    async def compare_and_swap(self, match: Match, expected_revision: int) -> bool:
        """Conditional update on ``revision``."""
        values = match_to_dict(match)
        values.pop("id")
        stmt = (
            update(matches_table)
            .where(
                and_(
                    matches_table.c.id == match.id,
                    matches_table.c.revision == expected_revision,
                )
            )
            .values(**values)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1  # type: ignore[attr-defined]
