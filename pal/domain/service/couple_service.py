"""Couple linking domain service."""

from typing import Optional
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from pal.domain.error import (
    ConcurrentModificationError,
    DuplicateCoupleLinkError,
    InvalidTransitionError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from pal.domain.model import CoupleLink, SessionContext, User
from pal.domain.repository import CoupleLinkRepository, UserRepository
from pal.domain.value import CoupleLinkId, RelationshipStatus, UserId
from pal.util.clock import Clock

from .base import Service


class CoupleService(Service):
    """Links the session user's account with their partner's.

    A request is pending until the partner confirms it. Either side may
    cancel a pending request or unlink a confirmed one; both delete the link.
    A user has at most one confirmed link.
    """

    def __init__(
        self,
        session: SessionContext,
        couple_repository: CoupleLinkRepository,
        user_repository: UserRepository,
        clock: Clock,
    ) -> None:
        self.session = session
        self.couple_repository = couple_repository
        self.user_repository = user_repository
        self.clock = clock

    @property
    def user_id(self) -> UserId:
        return self.session.user_id

    async def request_link(
        self, partner_email: str, relationship: RelationshipStatus
    ) -> CoupleLink:
        """Ask the user registered under ``partner_email`` to link accounts.

        Raises:
            ValidationError: On an empty email or a request to oneself
            NotFoundError: If nobody is registered under the email
            DuplicateCoupleLinkError: If the pair already has a link, or either
                side is already linked
        """
        email = partner_email.strip().lower()
        with logfire.span("couple_service.request_link", user_id=str(self.user_id)):
            if not email:
                raise ValidationError("Please enter a valid email address")

            partner = await self.user_repository.find_by_email(email)
            if not partner:
                raise NotFoundError("User", email)
            if partner.id == self.user_id:
                raise ValidationError("You cannot link your account with yourself")

            if await self.couple_repository.find_between(self.user_id, partner.id):
                raise DuplicateCoupleLinkError(str(self.user_id), str(partner.id))
            await self._ensure_unlinked(partner.id)

            now = self.clock.now()
            link = CoupleLink(
                id=CoupleLinkId(uuid4()),
                requester_id=self.user_id,
                partner_id=partner.id,
                relationship=relationship,
                created_at=now,
                updated_at=now,
            )
            try:
                saved = await self.couple_repository.save(link)
            except IntegrityError:
                raise DuplicateCoupleLinkError(str(self.user_id), str(partner.id))

            logfire.info(
                "Couple link requested",
                link_id=str(saved.id),
                user_id=str(self.user_id),
                partner_id=str(partner.id),
                relationship=relationship.value,
            )
            return saved

    async def list_pending(self) -> list[CoupleLink]:
        """Unconfirmed requests the session user sent or received, newest first."""
        return await self.couple_repository.find_for_user(self.user_id, confirmed=False)

    async def get_current(self) -> Optional[CoupleLink]:
        """The session user's confirmed link, if any."""
        links = await self.couple_repository.find_for_user(self.user_id, confirmed=True)
        return links[0] if links else None

    async def confirm_link(self, link_id: CoupleLinkId) -> CoupleLink:
        """Partner confirms a pending request.

        Raises:
            NotFoundError: If the link does not exist or is not visible
            NotAuthorizedError: If the session user sent the request
            InvalidTransitionError: If the link is already confirmed
            DuplicateCoupleLinkError: If either side got linked meanwhile
        """
        with logfire.span(
            "couple_service.confirm_link",
            user_id=str(self.user_id),
            link_id=str(link_id),
        ):
            link = await self._get_visible(link_id)
            if link.confirmed:
                raise InvalidTransitionError(
                    "CoupleLink", str(link_id), "confirmed", "confirmed"
                )
            if link.partner_id != self.user_id:
                raise NotAuthorizedError(
                    "confirm", "couple link", str(link_id), str(self.user_id)
                )
            await self._ensure_unlinked(link.requester_id)

            now = self.clock.now()
            confirmed = link.model_copy(
                update={
                    "confirmed": True,
                    "linked_at": now,
                    "revision": link.revision + 1,
                    "updated_at": now,
                }
            )
            if not await self.couple_repository.compare_and_swap(
                confirmed, link.revision
            ):
                raise ConcurrentModificationError(
                    "CoupleLink", str(link_id), "pending", "confirmed"
                )
            logfire.info(
                "Couple link confirmed",
                link_id=str(link_id),
                requester_id=str(link.requester_id),
                partner_id=str(link.partner_id),
            )
            return confirmed

    async def cancel_request(self, link_id: CoupleLinkId) -> None:
        """Withdraw or refuse a pending request.

        Raises:
            NotFoundError: If the link does not exist or is not visible
            InvalidTransitionError: If the link is confirmed (unlink instead)
        """
        with logfire.span(
            "couple_service.cancel_request",
            user_id=str(self.user_id),
            link_id=str(link_id),
        ):
            link = await self._get_visible(link_id)
            if link.confirmed:
                raise InvalidTransitionError(
                    "CoupleLink", str(link_id), "confirmed", "cancelled"
                )
            await self.couple_repository.delete(link_id)
            logfire.info("Couple link request cancelled", link_id=str(link_id))

    async def unlink(self) -> CoupleLink:
        """Remove the session user's confirmed link.

        Returns:
            The removed link

        Raises:
            NotFoundError: If the session user is not linked
        """
        with logfire.span("couple_service.unlink", user_id=str(self.user_id)):
            link = await self.get_current()
            if not link:
                raise NotFoundError("CoupleLink", f"confirmed link of {self.user_id}")
            await self.couple_repository.delete(link.id)
            logfire.info(
                "Couple unlinked",
                link_id=str(link.id),
                user_id=str(self.user_id),
            )
            return link

    async def get_partners(self, links: list[CoupleLink]) -> dict[UserId, User]:
        """Profiles of the other side of each link, keyed by user id."""
        ids = list({link.other_party(self.user_id) for link in links})
        return {user.id: user for user in await self.user_repository.find_many(ids)}

    async def _get_visible(self, link_id: CoupleLinkId) -> CoupleLink:
        link = await self.couple_repository.find_by_id(link_id)
        if not link or not link.involves(self.user_id):
            raise NotFoundError("CoupleLink", str(link_id))
        return link

    async def _ensure_unlinked(self, other_id: UserId) -> None:
        for user_id in (self.user_id, other_id):
            if await self.couple_repository.find_for_user(user_id, confirmed=True):
                logfire.warn(
                    "Couple link refused, user already linked",
                    user_id=str(user_id),
                )
                raise DuplicateCoupleLinkError(str(self.user_id), str(other_id))
