"""In-memory meetup invite repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from pal.domain.model.meetup import MeetupInvite
from pal.domain.repository.meetup import MeetupInviteRepository
from pal.domain.value import MeetupInviteId, UserId


class InMemoryMeetupInviteRepository(MeetupInviteRepository):
    """In-memory implementation of MeetupInviteRepository for testing."""

    def __init__(self) -> None:
        self._invites: dict[MeetupInviteId, MeetupInvite] = {}

    async def find_by_id(self, invite_id: MeetupInviteId) -> Optional[MeetupInvite]:
        return self._invites.get(invite_id)

    async def find_by_sender(self, sender_id: UserId) -> list[MeetupInvite]:
        invites = [i for i in self._invites.values() if i.sender_id == sender_id]
        invites.sort(key=lambda i: i.created_at, reverse=True)
        return invites

    async def find_by_receiver(self, receiver_id: UserId) -> list[MeetupInvite]:
        invites = [i for i in self._invites.values() if i.receiver_id == receiver_id]
        invites.sort(key=lambda i: i.created_at, reverse=True)
        return invites

    async def save(self, invite: MeetupInvite) -> MeetupInvite:
        """Insert an invite.

        Raises:
            IntegrityError: If the ID is already taken
        """
        if invite.id in self._invites:
            raise IntegrityError("Duplicate meetup invite", None, Exception())
        self._invites[invite.id] = invite
        return invite

    async def compare_and_swap(
        self, invite: MeetupInvite, expected_revision: int
    ) -> bool:
        current = self._invites.get(invite.id)
        if current is None or current.revision != expected_revision:
            return False
        self._invites[invite.id] = invite
        return True
