"""In-memory couple link repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from pal.domain.model.couple import CoupleLink
from pal.domain.repository.couple import CoupleLinkRepository
from pal.domain.value import CoupleLinkId, UserId


class InMemoryCoupleLinkRepository(CoupleLinkRepository):
    """In-memory implementation of CoupleLinkRepository for testing."""

    def __init__(self) -> None:
        self._links: dict[CoupleLinkId, CoupleLink] = {}

    async def find_by_id(self, link_id: CoupleLinkId) -> Optional[CoupleLink]:
        return self._links.get(link_id)

    async def find_between(
        self, user_id: UserId, other_id: UserId
    ) -> Optional[CoupleLink]:
        for link in self._links.values():
            if {link.requester_id, link.partner_id} == {user_id, other_id}:
                return link
        return None

    async def find_for_user(
        self, user_id: UserId, confirmed: Optional[bool] = None
    ) -> list[CoupleLink]:
        links = [
            link
            for link in self._links.values()
            if link.involves(user_id)
            and (confirmed is None or link.confirmed == confirmed)
        ]
        links.sort(key=lambda link: link.created_at, reverse=True)
        return links

    async def save(self, link: CoupleLink) -> CoupleLink:
        """Insert a link.

        Raises:
            IntegrityError: If the pair already has a link
        """
        if await self.find_between(link.requester_id, link.partner_id):
            raise IntegrityError("Duplicate couple link", None, Exception())
        self._links[link.id] = link
        return link

    async def compare_and_swap(self, link: CoupleLink, expected_revision: int) -> bool:
        current = self._links.get(link.id)
        if current is None or current.revision != expected_revision:
            return False
        self._links[link.id] = link
        return True

    async def delete(self, link_id: CoupleLinkId) -> bool:
        return self._links.pop(link_id, None) is not None
