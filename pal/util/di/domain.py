"""Domain layer DI providers."""

from collections.abc import AsyncIterator
from datetime import timedelta

from dishka import Scope, provide

from pal.config import (
    AuthSettings,
    MatchingSettings,
    QuotaSettings,
    RealtimeSettings,
)
from pal.domain.model import SessionContext
from pal.domain.repository import (
    ChangeFeed,
    CoupleLinkRepository,
    MatchRepository,
    MeetupInviteRepository,
    MessageRepository,
    ProfileDirectory,
    SwipeActionRepository,
    UserRepository,
)
from pal.domain.service import (
    CandidateService,
    CoupleService,
    JWTService,
    MatchService,
    MeetupService,
    MessageService,
    NotificationHub,
    UserService,
)
from pal.util.clock import Clock
from pal.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Session-aware services are REQUEST-scoped to align with the session
    context and repository/session lifecycle. The notification hub is
    APP-scoped because relays outlive requests.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(
        self,
        session: SessionContext,
        user_repository: UserRepository,
        clock: Clock,
        quota_settings: QuotaSettings,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            session=session,
            user_repository=user_repository,
            clock=clock,
            quota_settings=quota_settings,
        )

    @provide
    def get_match_service(
        self,
        session: SessionContext,
        match_repository: MatchRepository,
        swipe_action_repository: SwipeActionRepository,
        user_service: UserService,
        clock: Clock,
        matching_settings: MatchingSettings,
    ) -> MatchService:
        """Provide match domain service."""
        return MatchService(
            session=session,
            match_repository=match_repository,
            swipe_action_repository=swipe_action_repository,
            user_service=user_service,
            clock=clock,
            matching_settings=matching_settings,
        )

    @provide
    def get_candidate_service(
        self,
        session: SessionContext,
        user_repository: UserRepository,
        match_repository: MatchRepository,
        matching_settings: MatchingSettings,
    ) -> CandidateService:
        """Provide candidate browsing service."""
        return CandidateService(
            session=session,
            user_repository=user_repository,
            match_repository=match_repository,
            matching_settings=matching_settings,
        )

    @provide
    def get_message_service(
        self,
        session: SessionContext,
        message_repository: MessageRepository,
        match_repository: MatchRepository,
        clock: Clock,
    ) -> MessageService:
        """Provide message domain service."""
        return MessageService(
            session=session,
            message_repository=message_repository,
            match_repository=match_repository,
            clock=clock,
        )

    @provide
    def get_meetup_service(
        self,
        session: SessionContext,
        meetup_repository: MeetupInviteRepository,
        match_repository: MatchRepository,
        clock: Clock,
    ) -> MeetupService:
        """Provide meetup coordination service."""
        return MeetupService(
            session=session,
            meetup_repository=meetup_repository,
            match_repository=match_repository,
            clock=clock,
        )

    @provide
    def get_couple_service(
        self,
        session: SessionContext,
        couple_repository: CoupleLinkRepository,
        user_repository: UserRepository,
        clock: Clock,
    ) -> CoupleService:
        """Provide couple linking service."""
        return CoupleService(
            session=session,
            couple_repository=couple_repository,
            user_repository=user_repository,
            clock=clock,
        )

    @provide(scope=Scope.APP)
    async def get_notification_hub(
        self,
        change_feed: ChangeFeed,
        profile_directory: ProfileDirectory,
        clock: Clock,
        realtime_settings: RealtimeSettings,
    ) -> AsyncIterator[NotificationHub]:
        """Provide the process-wide notification hub; relays close on shutdown."""
        hub = NotificationHub(
            change_feed=change_feed,
            profile_directory=profile_directory,
            clock=clock,
            idle_timeout=timedelta(
                seconds=realtime_settings.relay_idle_timeout_seconds
            ),
            max_notifications=realtime_settings.max_notifications_per_relay,
        )
        yield hub
        await hub.close_all()
