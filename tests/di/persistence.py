"""Mock persistence providers for testing."""

from dishka import Scope, provide

from pal.domain.repository import (
    CoupleLinkRepository,
    MatchRepository,
    MeetupInviteRepository,
    MessageRepository,
    ProfileDirectory,
    SwipeActionRepository,
    UserRepository,
)
from pal.persistence.repository.inmemory import (
    InMemoryCoupleLinkRepository,
    InMemoryMatchRepository,
    InMemoryMeetupInviteRepository,
    InMemoryMessageRepository,
    InMemoryProfileDirectory,
    InMemorySwipeActionRepository,
    InMemoryUserRepository,
)
from pal.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so several users' request scopes share one
    store; each test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_match_repository(self) -> MatchRepository:
        return InMemoryMatchRepository()

    @provide(scope=Scope.APP)
    def get_message_repository(self) -> MessageRepository:
        return InMemoryMessageRepository()

    @provide(scope=Scope.APP)
    def get_meetup_repository(self) -> MeetupInviteRepository:
        return InMemoryMeetupInviteRepository()

    @provide(scope=Scope.APP)
    def get_swipe_action_repository(self) -> SwipeActionRepository:
        return InMemorySwipeActionRepository()

    @provide(scope=Scope.APP)
    def get_couple_repository(self) -> CoupleLinkRepository:
        return InMemoryCoupleLinkRepository()

    @provide(scope=Scope.APP)
    def get_profile_directory(
        self, user_repository: UserRepository, match_repository: MatchRepository
    ) -> ProfileDirectory:
        return InMemoryProfileDirectory(user_repository, match_repository)
