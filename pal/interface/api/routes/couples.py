"""Couple linking routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status

from pal.application.usecase.couple import (
    CancelCoupleLinkUseCase,
    ConfirmCoupleLinkUseCase,
    CoupleLinkItem,
    CoupleLinksResponse,
    ListCoupleLinksUseCase,
    RequestCoupleLinkRequest,
    RequestCoupleLinkUseCase,
    UnlinkCoupleUseCase,
)
from pal.domain.error import DomainError
from pal.interface.error import to_http_exception

router = APIRouter(prefix="/couples", tags=["couples"], route_class=DishkaRoute)


@router.post("", response_model=CoupleLinkItem, status_code=status.HTTP_201_CREATED)
async def request_couple_link(
    request: RequestCoupleLinkRequest,
    request_use_case: FromDishka[RequestCoupleLinkUseCase],
) -> CoupleLinkItem:
    """Ask the user with the given email to link accounts.

    404 if nobody uses the email, 422 for your own email, 409 if a link
    already exists.
    """
    try:
        return await request_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)


@router.get("", response_model=CoupleLinksResponse)
async def list_couple_links(
    list_use_case: FromDishka[ListCoupleLinksUseCase],
) -> CoupleLinksResponse:
    """The current user's confirmed link and open requests."""
    return await list_use_case.execute()


@router.delete("/current", status_code=status.HTTP_204_NO_CONTENT)
async def unlink_couple(unlink_use_case: FromDishka[UnlinkCoupleUseCase]) -> None:
    try:
        await unlink_use_case.execute()
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{link_id}/confirm", response_model=CoupleLinkItem)
async def confirm_couple_link(
    link_id: UUID,
    confirm_use_case: FromDishka[ConfirmCoupleLinkUseCase],
) -> CoupleLinkItem:
    """Confirm a request addressed to the current user."""
    try:
        return await confirm_use_case.execute(str(link_id))
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_couple_link(
    link_id: UUID,
    cancel_use_case: FromDishka[CancelCoupleLinkUseCase],
) -> None:
    """Withdraw a sent request or refuse a received one."""
    try:
        await cancel_use_case.execute(str(link_id))
    except DomainError as e:
        raise to_http_exception(e)
