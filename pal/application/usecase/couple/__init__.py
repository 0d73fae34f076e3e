"""Couple linking use cases."""

from .list_links import CoupleLinksResponse, ListCoupleLinksUseCase
from .request_link import (
    CoupleLinkItem,
    RequestCoupleLinkRequest,
    RequestCoupleLinkUseCase,
)
from .respond_to_link import (
    CancelCoupleLinkUseCase,
    ConfirmCoupleLinkUseCase,
    UnlinkCoupleUseCase,
)

__all__ = [
    "CancelCoupleLinkUseCase",
    "ConfirmCoupleLinkUseCase",
    "CoupleLinkItem",
    "CoupleLinksResponse",
    "ListCoupleLinksUseCase",
    "RequestCoupleLinkRequest",
    "RequestCoupleLinkUseCase",
    "UnlinkCoupleUseCase",
]
