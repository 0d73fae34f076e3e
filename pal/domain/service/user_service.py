"""User domain service."""

from datetime import date
from typing import Optional
from uuid import uuid4

import logfire

from pal.config import QuotaSettings
from pal.domain.error import (
    NotFoundError,
    QuotaExhaustedError,
    ValidationError,
)
from pal.domain.model import Interest, SessionContext, User
from pal.domain.repository import UserRepository
from pal.domain.value import InterestId, InterestName, SocialStyle, UserId
from pal.domain.value.common import ValueObject
from pal.util.clock import Clock

from .base import Service


class QuotaStatus(ValueObject):
    """Super-like allowance as seen by the user right now."""

    is_premium: bool
    remaining: int
    last_reset_date: Optional[date] = None


class UserService(Service):
    """Domain service for profile and quota operations of the session user."""

    def __init__(
        self,
        session: SessionContext,
        user_repository: UserRepository,
        clock: Clock,
        quota_settings: QuotaSettings,
    ) -> None:
        """Initialize user service.

        Args:
            session: Current user session
            user_repository: User repository
            clock: Time source
            quota_settings: Super-like quota configuration
        """
        self.session = session
        self.user_repository = user_repository
        self.clock = clock
        self.quota_settings = quota_settings

    async def get_user_by_id(self, user_id: UserId) -> Optional[User]:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User if found, None otherwise
        """
        return await self.user_repository.find_by_id(user_id)

    async def get_current_user(self) -> User:
        """Get the session user.

        Raises:
            NotFoundError: If the session user has no profile yet
        """
        user = await self.user_repository.find_by_id(self.session.user_id)
        if not user:
            raise NotFoundError("User", str(self.session.user_id))
        return user

    async def create_profile(
        self,
        name: str,
        email: Optional[str] = None,
        gender: Optional[list[str]] = None,
        looking_to_meet: Optional[list[str]] = None,
        social_style: SocialStyle = SocialStyle.AMBIVERT,
        interests: Optional[list[str]] = None,
        headline: Optional[str] = None,
        about_me: Optional[str] = None,
        profile_picture: Optional[str] = None,
    ) -> User:
        """Create the session user's profile at the end of signup.

        New users start on the free tier with a full day's super-likes.

        Raises:
            ValidationError: If the profile already exists or interests repeat
        """
        with logfire.span(
            "user_service.create_profile", user_id=str(self.session.user_id)
        ):
            existing = await self.user_repository.find_by_id(self.session.user_id)
            if existing:
                raise ValidationError("Profile already exists")

            now = self.clock.now()
            try:
                user = User(
                    id=self.session.user_id,
                    name=name,
                    email=email,
                    gender=gender or [],
                    looking_to_meet=looking_to_meet or [],
                    social_style=social_style,
                    interests=[
                        Interest(id=InterestId(uuid4()), name=InterestName(n))
                        for n in interests or []
                    ],
                    headline=headline,
                    about_me=about_me,
                    profile_picture=profile_picture,
                    is_premium=False,
                    super_likes_remaining=self.quota_settings.free_super_likes_per_day,
                    last_reset_date=self._today(),
                    last_active=now,
                    created_at=now,
                    updated_at=now,
                )
            except ValueError as e:
                raise ValidationError(str(e)) from e

            saved = await self.user_repository.save(user)
            logfire.info("Profile created", user_id=str(saved.id))
            return saved

    async def update_profile(self, **changes) -> User:
        """Update editable profile fields of the session user.

        Args:
            **changes: Any of name, email, gender, looking_to_meet,
                social_style, headline, about_me, profile_picture

        Raises:
            ValidationError: If an unknown or invalid field is given
        """
        editable = {
            "name",
            "email",
            "gender",
            "looking_to_meet",
            "social_style",
            "headline",
            "about_me",
            "profile_picture",
        }
        unknown = set(changes) - editable
        if unknown:
            raise ValidationError(f"Fields not editable: {sorted(unknown)}")

        with logfire.span(
            "user_service.update_profile",
            user_id=str(self.session.user_id),
            fields=sorted(changes),
        ):
            user = await self.get_current_user()
            data = user.model_dump()
            data.update(changes)
            data["updated_at"] = self.clock.now()
            try:
                updated = User.model_validate(data)
            except ValueError as e:
                raise ValidationError(str(e)) from e
            return await self.user_repository.save(updated)

    async def add_interest(self, name: str) -> User:
        """Add an interest to the session user's profile.

        Raises:
            ValidationError: If the name is invalid or already present
        """
        user = await self.get_current_user()
        try:
            interest_name = InterestName(name)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if interest_name.key in user.interest_keys:
            raise ValidationError(f"Interest '{interest_name.root}' already added")

        updated = user.model_copy(
            update={
                "interests": [
                    *user.interests,
                    Interest(id=InterestId(uuid4()), name=interest_name),
                ],
                "updated_at": self.clock.now(),
            }
        )
        return await self.user_repository.save(updated)

    async def remove_interest(self, name: str) -> User:
        """Remove an interest by name (case-insensitive). Unknown names are ignored."""
        user = await self.get_current_user()
        key = name.strip().casefold()
        remaining = [i for i in user.interests if i.name.key != key]
        if len(remaining) == len(user.interests):
            return user
        updated = user.model_copy(
            update={"interests": remaining, "updated_at": self.clock.now()}
        )
        return await self.user_repository.save(updated)

    async def upgrade_to_premium(self) -> User:
        """Upgrade the session user to premium.

        Premium users get the sentinel super-like count and skip daily resets.
        """
        with logfire.span(
            "user_service.upgrade_to_premium", user_id=str(self.session.user_id)
        ):
            user = await self.get_current_user()
            if user.is_premium:
                return user
            upgraded = user.model_copy(
                update={
                    "is_premium": True,
                    "super_likes_remaining": self.quota_settings.premium_sentinel,
                    "updated_at": self.clock.now(),
                }
            )
            saved = await self.user_repository.save(upgraded)
            logfire.info("User upgraded to premium", user_id=str(saved.id))
            return saved

    async def get_quota_status(self) -> QuotaStatus:
        """Current super-like allowance, with today's reset applied (not persisted)."""
        user = self._with_daily_reset(await self.get_current_user())
        return QuotaStatus(
            is_premium=user.is_premium,
            remaining=user.super_likes_remaining,
            last_reset_date=user.last_reset_date,
        )

    async def ensure_super_like_available(self) -> User:
        """Check the session user may super-like now.

        Raises:
            QuotaExhaustedError: If free quota is used up for today
        """
        user = self._with_daily_reset(await self.get_current_user())
        if not user.is_premium and user.super_likes_remaining <= 0:
            logfire.warn("Super-like quota exhausted", user_id=str(user.id))
            raise QuotaExhaustedError(str(user.id))
        return user

    async def reserve_super_like(self) -> User:
        """Spend one super-like from the session user's quota.

        Applies the lazy daily reset first. Premium users are not charged.

        Returns:
            The user after the charge

        Raises:
            QuotaExhaustedError: If free quota is used up for today
        """
        with logfire.span(
            "user_service.reserve_super_like", user_id=str(self.session.user_id)
        ):
            stored = await self.get_current_user()
            user = await self.ensure_super_like_available()
            if user.is_premium:
                return user

            charged = user.model_copy(
                update={
                    "super_likes_remaining": user.super_likes_remaining - 1,
                    "updated_at": self.clock.now(),
                }
            )
            saved = await self.user_repository.save(charged)
            logfire.info(
                "Super-like reserved",
                user_id=str(saved.id),
                remaining=saved.super_likes_remaining,
                was_reset=stored.last_reset_date != saved.last_reset_date,
            )
            return saved

    async def touch_last_active(self) -> None:
        """Record activity of the session user."""
        user = await self.user_repository.find_by_id(self.session.user_id)
        if user:
            await self.user_repository.save(
                user.model_copy(update={"last_active": self.clock.now()})
            )

    def _today(self) -> date:
        return self.clock.today(self.quota_settings.reset_timezone)

    def _with_daily_reset(self, user: User) -> User:
        """Restore the free baseline when the stored reset date is not today.

        Resets follow calendar days in ``quota.reset_timezone``, not elapsed
        24h windows.
        """
        if user.is_premium:
            return user
        today = self._today()
        if user.last_reset_date == today:
            return user
        return user.model_copy(
            update={
                "super_likes_remaining": self.quota_settings.free_super_likes_per_day,
                "last_reset_date": today,
            }
        )
