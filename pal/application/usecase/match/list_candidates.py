"""List candidates use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from pal.application.usecase.base import BaseUseCase
from pal.domain.service import CandidateService
from pal.domain.value import CandidateFilter, CandidateSort, SocialStyle


class CandidateItem(BaseModel):
    user_id: str
    name: str
    gender: list[str]
    social_style: SocialStyle
    interests: list[str]
    headline: Optional[str]
    about: str
    profile_picture: Optional[str]
    compatibility_score: int
    last_active: datetime


class ListCandidatesRequest(BaseModel):
    """Any-of filters; empty lists do not filter."""

    gender: list[str] = []
    social_style: list[SocialStyle] = []
    interests: list[str] = []
    sort: CandidateSort = CandidateSort.COMPATIBILITY


class ListCandidatesResponse(BaseModel):
    candidates: list[CandidateItem]


class ListCandidatesUseCase(BaseUseCase):
    """Use case for browsing people to match with."""

    def __init__(self, candidate_service: CandidateService) -> None:
        self.candidate_service = candidate_service

    async def execute(self, request: ListCandidatesRequest) -> ListCandidatesResponse:
        filters = CandidateFilter(
            gender=request.gender,
            social_style=request.social_style,
            interests=request.interests,
        )
        candidates = await self.candidate_service.list_candidates(
            filters=filters, sort=request.sort
        )
        return ListCandidatesResponse(
            candidates=[
                CandidateItem(
                    user_id=str(c.user_id),
                    name=c.name,
                    gender=c.gender,
                    social_style=c.social_style,
                    interests=c.interests,
                    headline=c.headline,
                    about=c.about,
                    profile_picture=c.profile_picture,
                    compatibility_score=c.compatibility_score,
                    last_active=c.last_active,
                )
                for c in candidates
            ]
        )
