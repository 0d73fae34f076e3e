"""Candidate, swipe and match routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from pal.application.usecase.match import (
    ListCandidatesRequest,
    ListCandidatesResponse,
    ListCandidatesUseCase,
    ListMatchesRequest,
    ListMatchesResponse,
    ListMatchesUseCase,
    MatchItem,
    MatchListKind,
    RespondToMatchRequest,
    RespondToMatchUseCase,
    SwipeRequest,
    SwipeResponse,
    SwipeUseCase,
    UndoLastActionUseCase,
)
from pal.domain.error import DomainError
from pal.domain.value import CandidateSort, SocialStyle, SwipeDecision
from pal.interface.error import to_http_exception

router = APIRouter(tags=["matches"], route_class=DishkaRoute)


@router.get("/candidates", response_model=ListCandidatesResponse)
async def list_candidates(
    list_candidates_use_case: FromDishka[ListCandidatesUseCase],
    gender: Optional[list[str]] = Query(default=None),
    social_style: Optional[list[SocialStyle]] = Query(default=None),
    interests: Optional[list[str]] = Query(default=None),
    sort: CandidateSort = CandidateSort.COMPATIBILITY,
) -> ListCandidatesResponse:
    """List people the current user can swipe on.

    Args:
        gender: Keep candidates with any of these genders
        social_style: Keep candidates with any of these styles
        interests: Keep candidates sharing any of these interests
        sort: compatibility (default) or recent
    """
    request = ListCandidatesRequest(
        gender=gender or [],
        social_style=social_style or [],
        interests=interests or [],
        sort=sort,
    )
    return await list_candidates_use_case.execute(request)


@router.post("/swipes", response_model=SwipeResponse)
async def swipe(
    request: SwipeRequest,
    swipe_use_case: FromDishka[SwipeUseCase],
) -> SwipeResponse:
    """Like, super-like or skip a candidate."""
    try:
        return await swipe_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/matches", response_model=ListMatchesResponse)
async def list_matches(
    list_matches_use_case: FromDishka[ListMatchesUseCase],
    kind: MatchListKind = MatchListKind.ACCEPTED,
) -> ListMatchesResponse:
    """List the current user's incoming, outgoing or accepted matches."""
    return await list_matches_use_case.execute(ListMatchesRequest(kind=kind))


@router.post("/matches/undo", response_model=MatchItem)
async def undo_last_action(
    undo_use_case: FromDishka[UndoLastActionUseCase],
) -> MatchItem:
    """Undo the last accept or decline (premium only)."""
    try:
        return await undo_use_case.execute()
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/matches/{match_id}/accept", response_model=MatchItem)
async def accept_match(
    match_id: UUID,
    respond_use_case: FromDishka[RespondToMatchUseCase],
) -> MatchItem:
    """Accept an incoming match proposal."""
    try:
        return await respond_use_case.execute(
            RespondToMatchRequest(
                match_id=str(match_id), decision=SwipeDecision.ACCEPTED
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/matches/{match_id}/decline", response_model=MatchItem)
async def decline_match(
    match_id: UUID,
    respond_use_case: FromDishka[RespondToMatchUseCase],
) -> MatchItem:
    """Decline an incoming match proposal."""
    try:
        return await respond_use_case.execute(
            RespondToMatchRequest(
                match_id=str(match_id), decision=SwipeDecision.DECLINED
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
