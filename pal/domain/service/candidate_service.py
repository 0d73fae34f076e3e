"""Candidate browsing service.

Filtering and sorting are plain functions over ``Candidate`` lists so they
stay deterministic and easy to test without any repository.
"""

from typing import Iterable, Optional

import logfire

from pal.adapter.error import UpstreamUnavailableError
from pal.config import MatchingSettings
from pal.domain.model import Candidate, SessionContext, User
from pal.domain.repository import MatchRepository, UserRepository
from pal.domain.value import CandidateFilter, CandidateSort, UserId

from .base import Service


def compatibility_score(viewer: User, other: User) -> int:
    """Jaccard overlap of interest names, scaled to 0-100."""
    mine = viewer.interest_keys
    theirs = other.interest_keys
    union = mine | theirs
    if not union:
        return 0
    return round(100 * len(mine & theirs) / len(union))


def to_candidate(viewer: User, other: User) -> Candidate:
    """Project another user into the browsing read model."""
    return Candidate(
        user_id=other.id,
        name=other.name,
        gender=other.gender,
        social_style=other.social_style,
        interests=[interest.name.root for interest in other.interests],
        headline=other.headline,
        about=other.display_about,
        profile_picture=other.profile_picture,
        compatibility_score=compatibility_score(viewer, other),
        last_active=other.last_active,
    )


def filter_candidates(
    candidates: Iterable[Candidate], filters: CandidateFilter
) -> list[Candidate]:
    """Keep candidates matching every non-empty filter (each filter is any-of)."""
    genders = set(filters.gender)
    styles = set(filters.social_style)
    interests = {name.strip().casefold() for name in filters.interests}

    result = []
    for candidate in candidates:
        if genders and not genders.intersection(candidate.gender):
            continue
        if styles and candidate.social_style not in styles:
            continue
        if interests and not interests.intersection(
            name.casefold() for name in candidate.interests
        ):
            continue
        result.append(candidate)
    return result


def sort_candidates(
    candidates: Iterable[Candidate], sort: CandidateSort
) -> list[Candidate]:
    """Sort descending by the chosen key.

    Ties fall back to most recently active, then user id, so the same input
    always yields the same order.
    """
    ordered = sorted(candidates, key=lambda c: str(c.user_id))
    ordered.sort(key=lambda c: c.last_active, reverse=True)
    if sort == CandidateSort.COMPATIBILITY:
        ordered.sort(key=lambda c: c.compatibility_score, reverse=True)
    return ordered


class CandidateService(Service):
    """Lists users the session user could match with."""

    def __init__(
        self,
        session: SessionContext,
        user_repository: UserRepository,
        match_repository: MatchRepository,
        matching_settings: MatchingSettings,
    ) -> None:
        self.session = session
        self.user_repository = user_repository
        self.match_repository = match_repository
        self.matching_settings = matching_settings

    async def list_candidates(
        self,
        filters: Optional[CandidateFilter] = None,
        sort: CandidateSort = CandidateSort.COMPATIBILITY,
    ) -> list[Candidate]:
        """List candidates for the session user.

        Excludes the viewer and anyone the viewer already has an active match
        with (in either direction).

        Args:
            filters: Optional any-of filters
            sort: Ordering of the result

        Returns:
            At most ``matching.candidate_page_size`` candidates; an empty list
            if the store is unavailable
        """
        user_id = self.session.user_id
        with logfire.span(
            "candidate_service.list_candidates",
            user_id=str(user_id),
            sort=sort.value,
        ):
            try:
                viewer = await self.user_repository.find_by_id(user_id)
                if not viewer:
                    return []
                matches = await self.match_repository.find_for_user(user_id)
                excluded: set[UserId] = {
                    m.other_party(user_id) for m in matches if m.is_active
                }
                others = await self.user_repository.find_browsable(
                    user_id, excluded, filters
                )
            except UpstreamUnavailableError as e:
                logfire.warn(
                    "Candidate listing degraded to empty result",
                    user_id=str(user_id),
                    error=str(e),
                )
                return []

            candidates = [to_candidate(viewer, other) for other in others]
            if filters:
                candidates = filter_candidates(candidates, filters)
            candidates = sort_candidates(candidates, sort)

            page = candidates[: self.matching_settings.candidate_page_size]
            logfire.info(
                "Candidates listed",
                user_id=str(user_id),
                total=len(candidates),
                returned=len(page),
            )
            return page
