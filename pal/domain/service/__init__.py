"""Domain services."""

from .base import Service
from .candidate_service import CandidateService
from .couple_service import CoupleService
from .jwt_service import JWTService
from .match_service import MatchService
from .meetup_service import MeetupService
from .message_service import MessageService
from .notification_hub import NotificationHub
from .notification_relay import NotificationRelay
from .user_service import QuotaStatus, UserService

__all__ = [
    "CandidateService",
    "CoupleService",
    "JWTService",
    "MatchService",
    "MeetupService",
    "MessageService",
    "NotificationHub",
    "NotificationRelay",
    "QuotaStatus",
    "Service",
    "UserService",
]
