"""Meetup use cases."""

from .create_invite import CreateInviteRequest, CreateInviteUseCase, InviteItem
from .list_invites import ListInvitesResponse, ListInvitesUseCase
from .respond_to_invite import (
    InviteAction,
    RespondToInviteRequest,
    RespondToInviteUseCase,
)

__all__ = [
    "CreateInviteRequest",
    "CreateInviteUseCase",
    "InviteAction",
    "InviteItem",
    "ListInvitesResponse",
    "ListInvitesUseCase",
    "RespondToInviteRequest",
    "RespondToInviteUseCase",
]
