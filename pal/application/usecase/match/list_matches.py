"""List matches use case."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel

from pal.application.usecase.base import BaseUseCase
from pal.domain.model import Match
from pal.domain.service import MatchService
from pal.domain.value import MatchStatus


class MatchItem(BaseModel):
    """Match as seen by one of its participants."""

    match_id: str
    initiator_id: str
    target_id: str
    other_user_id: str
    status: MatchStatus
    is_super_like: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_match(cls, match: Match, viewer_id) -> "MatchItem":
        return cls(
            match_id=str(match.id),
            initiator_id=str(match.initiator_id),
            target_id=str(match.target_id),
            other_user_id=str(match.other_party(viewer_id)),
            status=match.status,
            is_super_like=match.is_super_like,
            created_at=match.created_at,
            updated_at=match.updated_at,
        )


class MatchListKind(str, Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"
    ACCEPTED = "accepted"


class ListMatchesRequest(BaseModel):
    kind: MatchListKind = MatchListKind.ACCEPTED


class ListMatchesResponse(BaseModel):
    matches: list[MatchItem]


class ListMatchesUseCase(BaseUseCase):
    """Use case for listing incoming, outgoing or accepted matches."""

    def __init__(self, match_service: MatchService) -> None:
        self.match_service = match_service

    async def execute(self, request: ListMatchesRequest) -> ListMatchesResponse:
        if request.kind == MatchListKind.INCOMING:
            matches = await self.match_service.list_incoming()
        elif request.kind == MatchListKind.OUTGOING:
            matches = await self.match_service.list_outgoing()
        else:
            matches = await self.match_service.list_accepted()

        viewer_id = self.match_service.user_id
        return ListMatchesResponse(
            matches=[MatchItem.from_match(m, viewer_id) for m in matches]
        )
