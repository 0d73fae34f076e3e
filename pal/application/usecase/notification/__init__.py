"""Notification use cases."""

from .get_notifications import (
    CloseNotificationFeedUseCase,
    GetNotificationsUseCase,
    NotificationFeedResponse,
    NotificationItem,
    OpenNotificationFeedUseCase,
)
from .mark_read import MarkNotificationsReadRequest, MarkNotificationsReadUseCase

__all__ = [
    "CloseNotificationFeedUseCase",
    "GetNotificationsUseCase",
    "MarkNotificationsReadRequest",
    "MarkNotificationsReadUseCase",
    "NotificationFeedResponse",
    "NotificationItem",
    "OpenNotificationFeedUseCase",
]
