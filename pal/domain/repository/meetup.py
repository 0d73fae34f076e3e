"""Meetup invite repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pal.domain.model.meetup import MeetupInvite
from pal.domain.value import MeetupInviteId, UserId


class MeetupInviteRepository(ABC):
    """Repository for MeetupInvite entity."""

    @abstractmethod
    async def find_by_id(self, invite_id: MeetupInviteId) -> Optional[MeetupInvite]:
        """Find an invite by ID."""
        pass

    @abstractmethod
    async def find_by_sender(self, sender_id: UserId) -> list[MeetupInvite]:
        """Find invites sent by a user, newest first."""
        pass

    @abstractmethod
    async def find_by_receiver(self, receiver_id: UserId) -> list[MeetupInvite]:
        """Find invites received by a user, newest first."""
        pass

    @abstractmethod
    async def save(self, invite: MeetupInvite) -> MeetupInvite:
        """Insert a new invite."""
        pass

    @abstractmethod
    async def compare_and_swap(
        self, invite: MeetupInvite, expected_revision: int
    ) -> bool:
        """Write ``invite`` only if the stored revision equals ``expected_revision``.

        Returns:
            True if written, False if the stored row moved on
        """
        pass
