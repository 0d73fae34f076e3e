"""Dict-backed user store for tests and local runs."""

from typing import Optional

from pal.domain.model.user import User
from pal.domain.repository.user import UserRepository
from pal.domain.value import CandidateFilter, UserId


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def find_many(self, user_ids: list[UserId]) -> list[User]:
        return [self._users[uid] for uid in user_ids if uid in self._users]

    async def find_browsable(
        self,
        viewer_id: UserId,
        exclude: set[UserId],
        filters: Optional[CandidateFilter] = None,
    ) -> list[User]:
        filters = filters or CandidateFilter()
        genders = set(filters.gender)
        styles = set(filters.social_style)
        interests = {name.strip().lower() for name in filters.interests}

        result = []
        for user in self._users.values():
            if user.id == viewer_id or user.id in exclude:
                continue
            if genders and not genders.intersection(user.gender):
                continue
            if styles and user.social_style not in styles:
                continue
            if interests and not interests.intersection(
                i.name.root.lower() for i in user.interests
            ):
                continue
            result.append(user)

        result.sort(key=lambda u: str(u.id))
        result.sort(key=lambda u: u.last_active, reverse=True)
        return result

    async def find_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        for user in self._users.values():
            if user.email and user.email.lower() == wanted:
                return user
        return None

    async def save(self, user: User) -> User:
        self._users[user.id] = user
        return user
