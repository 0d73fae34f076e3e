"""Meetup invite routes."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from pal.application.usecase.meetup import (
    CreateInviteRequest,
    CreateInviteUseCase,
    InviteAction,
    InviteItem,
    ListInvitesResponse,
    ListInvitesUseCase,
    RespondToInviteRequest,
    RespondToInviteUseCase,
)
from pal.domain.error import DomainError
from pal.interface.error import to_http_exception

router = APIRouter(prefix="/meetups", tags=["meetups"], route_class=DishkaRoute)


class RespondToInviteAPIRequest(BaseModel):
    """API request for answering an invite."""

    action: InviteAction
    proposed_at: Optional[datetime] = None


@router.post("", response_model=InviteItem, status_code=status.HTTP_201_CREATED)
async def create_invite(
    request: CreateInviteRequest,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
) -> InviteItem:
    """Invite the other side of an accepted match to meet."""
    try:
        return await create_invite_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)


@router.get("", response_model=ListInvitesResponse)
async def list_invites(
    list_invites_use_case: FromDishka[ListInvitesUseCase],
) -> ListInvitesResponse:
    """List invites the current user sent and received."""
    return await list_invites_use_case.execute()


@router.post("/{invite_id}/respond", response_model=InviteItem)
async def respond_to_invite(
    invite_id: UUID,
    request: RespondToInviteAPIRequest,
    respond_use_case: FromDishka[RespondToInviteUseCase],
) -> InviteItem:
    """Accept, decline, cancel or propose a new time for an invite."""
    try:
        return await respond_use_case.execute(
            RespondToInviteRequest(
                invite_id=str(invite_id),
                action=request.action,
                proposed_at=request.proposed_at,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
