"""Match use cases."""

from .list_candidates import (
    CandidateItem,
    ListCandidatesRequest,
    ListCandidatesResponse,
    ListCandidatesUseCase,
)
from .list_matches import (
    ListMatchesRequest,
    ListMatchesResponse,
    ListMatchesUseCase,
    MatchItem,
    MatchListKind,
)
from .respond_to_match import RespondToMatchRequest, RespondToMatchUseCase
from .swipe import SwipeAction, SwipeRequest, SwipeResponse, SwipeUseCase
from .undo_last_action import UndoLastActionUseCase

__all__ = [
    "CandidateItem",
    "ListCandidatesRequest",
    "ListCandidatesResponse",
    "ListCandidatesUseCase",
    "ListMatchesRequest",
    "ListMatchesResponse",
    "ListMatchesUseCase",
    "MatchItem",
    "MatchListKind",
    "RespondToMatchRequest",
    "RespondToMatchUseCase",
    "SwipeAction",
    "SwipeRequest",
    "SwipeResponse",
    "SwipeUseCase",
    "UndoLastActionUseCase",
]
