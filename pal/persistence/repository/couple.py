"""PostgreSQL implementation of CoupleLink repository."""

from typing import Optional

from sqlalchemy import and_, delete, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pal.domain.model import CoupleLink
from pal.domain.repository import CoupleLinkRepository
from pal.domain.value import CoupleLinkId, UserId
from pal.persistence.database import translate_upstream_errors
from pal.persistence.mappers import couple_link_to_dict, row_to_couple_link
from pal.persistence.tables import couple_links_table


class PostgresCoupleLinkRepository(CoupleLinkRepository):
    """PostgreSQL implementation of CoupleLinkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _fetch(self, stmt) -> list[CoupleLink]:
        result = await self.session.execute(stmt)
        return [row_to_couple_link(dict(row)) for row in result.mappings().all()]

    @translate_upstream_errors
    async def find_by_id(self, link_id: CoupleLinkId) -> Optional[CoupleLink]:
        links = await self._fetch(
            select(couple_links_table).where(couple_links_table.c.id == link_id)
        )
        return links[0] if links else None

    @translate_upstream_errors
    async def find_between(
        self, user_id: UserId, other_id: UserId
    ) -> Optional[CoupleLink]:
        c = couple_links_table.c
        links = await self._fetch(
            select(couple_links_table).where(
                or_(
                    and_(c.requester_id == user_id, c.partner_id == other_id),
                    and_(c.requester_id == other_id, c.partner_id == user_id),
                )
            )
        )
        return links[0] if links else None

    @translate_upstream_errors
    async def find_for_user(
        self, user_id: UserId, confirmed: Optional[bool] = None
    ) -> list[CoupleLink]:
        c = couple_links_table.c
        stmt = select(couple_links_table).where(
            or_(c.requester_id == user_id, c.partner_id == user_id)
        )
        if confirmed is not None:
            stmt = stmt.where(c.confirmed.is_(confirmed))
        return await self._fetch(stmt.order_by(c.created_at.desc()))

    @translate_upstream_errors
    async def save(self, link: CoupleLink) -> CoupleLink:
        stmt = insert(couple_links_table).values(**couple_link_to_dict(link))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return link

    @translate_upstream_errors
    async def compare_and_swap(self, link: CoupleLink, expected_revision: int) -> bool:
        values = couple_link_to_dict(link)
        values.pop("id")
        stmt = (
            update(couple_links_table)
            .where(
                and_(
                    couple_links_table.c.id == link.id,
                    couple_links_table.c.revision == expected_revision,
                )
            )
            .values(**values)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1  # type: ignore[attr-defined]

    @translate_upstream_errors
    async def delete(self, link_id: CoupleLinkId) -> bool:
        result = await self.session.execute(
            delete(couple_links_table).where(couple_links_table.c.id == link_id)
        )
        await self.session.flush()
        return result.rowcount == 1  # type: ignore[attr-defined]
