"""Application layer DI providers."""

from dishka import Scope, provide

from pal.application.usecase.couple import (
    CancelCoupleLinkUseCase,
    ConfirmCoupleLinkUseCase,
    ListCoupleLinksUseCase,
    RequestCoupleLinkUseCase,
    UnlinkCoupleUseCase,
)
from pal.application.usecase.match import (
    ListCandidatesUseCase,
    ListMatchesUseCase,
    RespondToMatchUseCase,
    SwipeUseCase,
    UndoLastActionUseCase,
)
from pal.application.usecase.meetup import (
    CreateInviteUseCase,
    ListInvitesUseCase,
    RespondToInviteUseCase,
)
from pal.application.usecase.message import (
    GetConversationUseCase,
    ListConversationsUseCase,
    SendMessageUseCase,
)
from pal.application.usecase.notification import (
    CloseNotificationFeedUseCase,
    GetNotificationsUseCase,
    MarkNotificationsReadUseCase,
    OpenNotificationFeedUseCase,
)
from pal.application.usecase.user import (
    CreateProfileUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
    UpgradeToPremiumUseCase,
)
from pal.domain.model import SessionContext
from pal.domain.service import (
    CandidateService,
    CoupleService,
    MatchService,
    MeetupService,
    MessageService,
    NotificationHub,
    UserService,
)
from pal.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # User use cases
    @provide
    def get_create_profile_use_case(
        self, user_service: UserService
    ) -> CreateProfileUseCase:
        return CreateProfileUseCase(user_service=user_service)

    @provide
    def get_get_profile_use_case(self, user_service: UserService) -> GetProfileUseCase:
        return GetProfileUseCase(user_service=user_service)

    @provide
    def get_update_profile_use_case(
        self, user_service: UserService
    ) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(user_service=user_service)

    @provide
    def get_upgrade_to_premium_use_case(
        self, user_service: UserService
    ) -> UpgradeToPremiumUseCase:
        return UpgradeToPremiumUseCase(user_service=user_service)

    # Match use cases
    @provide
    def get_swipe_use_case(
        self, match_service: MatchService, user_service: UserService
    ) -> SwipeUseCase:
        return SwipeUseCase(match_service=match_service, user_service=user_service)

    @provide
    def get_respond_to_match_use_case(
        self, match_service: MatchService
    ) -> RespondToMatchUseCase:
        return RespondToMatchUseCase(match_service=match_service)

    @provide
    def get_undo_last_action_use_case(
        self, match_service: MatchService
    ) -> UndoLastActionUseCase:
        return UndoLastActionUseCase(match_service=match_service)

    @provide
    def get_list_matches_use_case(
        self, match_service: MatchService
    ) -> ListMatchesUseCase:
        return ListMatchesUseCase(match_service=match_service)

    @provide
    def get_list_candidates_use_case(
        self, candidate_service: CandidateService
    ) -> ListCandidatesUseCase:
        return ListCandidatesUseCase(candidate_service=candidate_service)

    # Meetup use cases
    @provide
    def get_create_invite_use_case(
        self, meetup_service: MeetupService
    ) -> CreateInviteUseCase:
        return CreateInviteUseCase(meetup_service=meetup_service)

    @provide
    def get_respond_to_invite_use_case(
        self, meetup_service: MeetupService
    ) -> RespondToInviteUseCase:
        return RespondToInviteUseCase(meetup_service=meetup_service)

    @provide
    def get_list_invites_use_case(
        self, meetup_service: MeetupService
    ) -> ListInvitesUseCase:
        return ListInvitesUseCase(meetup_service=meetup_service)

    # Message use cases
    @provide
    def get_send_message_use_case(
        self, message_service: MessageService
    ) -> SendMessageUseCase:
        return SendMessageUseCase(message_service=message_service)

    @provide
    def get_get_conversation_use_case(
        self, message_service: MessageService
    ) -> GetConversationUseCase:
        return GetConversationUseCase(message_service=message_service)

    @provide
    def get_list_conversations_use_case(
        self, message_service: MessageService
    ) -> ListConversationsUseCase:
        return ListConversationsUseCase(message_service=message_service)

    # Notification use cases
    @provide
    def get_open_notification_feed_use_case(
        self, notification_hub: NotificationHub, session: SessionContext
    ) -> OpenNotificationFeedUseCase:
        return OpenNotificationFeedUseCase(
            notification_hub=notification_hub, session=session
        )

    @provide
    def get_get_notifications_use_case(
        self, notification_hub: NotificationHub, session: SessionContext
    ) -> GetNotificationsUseCase:
        return GetNotificationsUseCase(
            notification_hub=notification_hub, session=session
        )

    @provide
    def get_mark_notifications_read_use_case(
        self, notification_hub: NotificationHub, session: SessionContext
    ) -> MarkNotificationsReadUseCase:
        return MarkNotificationsReadUseCase(
            notification_hub=notification_hub, session=session
        )

    @provide
    def get_close_notification_feed_use_case(
        self, notification_hub: NotificationHub, session: SessionContext
    ) -> CloseNotificationFeedUseCase:
        return CloseNotificationFeedUseCase(
            notification_hub=notification_hub, session=session
        )

    # Couple linking use cases
    @provide
    def get_request_couple_link_use_case(
        self, couple_service: CoupleService
    ) -> RequestCoupleLinkUseCase:
        return RequestCoupleLinkUseCase(couple_service=couple_service)

    @provide
    def get_list_couple_links_use_case(
        self, couple_service: CoupleService
    ) -> ListCoupleLinksUseCase:
        return ListCoupleLinksUseCase(couple_service=couple_service)

    @provide
    def get_confirm_couple_link_use_case(
        self, couple_service: CoupleService
    ) -> ConfirmCoupleLinkUseCase:
        return ConfirmCoupleLinkUseCase(couple_service=couple_service)

    @provide
    def get_cancel_couple_link_use_case(
        self, couple_service: CoupleService
    ) -> CancelCoupleLinkUseCase:
        return CancelCoupleLinkUseCase(couple_service=couple_service)

    @provide
    def get_unlink_couple_use_case(
        self, couple_service: CoupleService
    ) -> UnlinkCoupleUseCase:
        return UnlinkCoupleUseCase(couple_service=couple_service)
