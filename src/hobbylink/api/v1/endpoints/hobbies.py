"""Hobby catalogue endpoints for the HobbyLink API."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import APIRouter

from hobbylink.models import Community, Hobby
from hobbylink.schemas.community import CommunityWithMembers
from hobbylink.schemas.hobby import HobbyResponse
from hobbylink.services import community_service, hobby_service

from ..dependencies import SessionDep

router = APIRouter(prefix="/hobbies", tags=["hobbies"])


@router.get("/", response_model=list[HobbyResponse])
async def list_hobbies(db: SessionDep) -> Sequence[Hobby]:
    """List all hobbies alphabetically."""
    return hobby_service.get_hobbies(db)


@router.get("/{hobby_id}", response_model=HobbyResponse)
async def get_hobby(hobby_id: int, db: SessionDep) -> Hobby:
    return hobby_service.get_hobby(db, hobby_id)


@router.get("/{hobby_id}/communities", response_model=list[CommunityWithMembers])
async def get_hobby_communities(hobby_id: int, db: SessionDep) -> Sequence[Community]:
    """List a hobby's communities with their member ids, newest first."""
    hobby_service.get_hobby(db, hobby_id)
    return community_service.get_communities_by_hobby(db, hobby_id)
