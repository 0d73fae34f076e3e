"""In-session notification routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status

from pal.application.usecase.notification import (
    CloseNotificationFeedUseCase,
    GetNotificationsUseCase,
    MarkNotificationsReadRequest,
    MarkNotificationsReadUseCase,
    NotificationFeedResponse,
    OpenNotificationFeedUseCase,
)

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.post("/subscription", response_model=NotificationFeedResponse)
async def open_notification_feed(
    open_use_case: FromDishka[OpenNotificationFeedUseCase],
) -> NotificationFeedResponse:
    """Start relaying likes and messages for the current user.

    Opening an already-open feed returns it unchanged.
    """
    return await open_use_case.execute()


@router.delete("/subscription", status_code=status.HTTP_204_NO_CONTENT)
async def close_notification_feed(
    close_use_case: FromDishka[CloseNotificationFeedUseCase],
) -> None:
    """Stop relaying and discard the current user's notifications."""
    await close_use_case.execute()


@router.get("", response_model=NotificationFeedResponse)
async def get_notifications(
    get_notifications_use_case: FromDishka[GetNotificationsUseCase],
) -> NotificationFeedResponse:
    """Get the current user's notifications, newest first."""
    return await get_notifications_use_case.execute()


@router.post("/read-all", response_model=NotificationFeedResponse)
async def mark_all_read(
    mark_read_use_case: FromDishka[MarkNotificationsReadUseCase],
) -> NotificationFeedResponse:
    """Mark every notification read."""
    return await mark_read_use_case.execute(MarkNotificationsReadRequest())


@router.post("/{notification_id}/read", response_model=NotificationFeedResponse)
async def mark_read(
    notification_id: str,
    mark_read_use_case: FromDishka[MarkNotificationsReadUseCase],
) -> NotificationFeedResponse:
    """Mark one notification read. Unknown ids are ignored."""
    return await mark_read_use_case.execute(
        MarkNotificationsReadRequest(notification_id=notification_id)
    )
