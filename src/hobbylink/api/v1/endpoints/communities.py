"""Community-related endpoints for the HobbyLink API."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import APIRouter, Query, Response, status

from hobbylink.core.settings import settings
from hobbylink.models import Community, Post
from hobbylink.schemas.common import SuccessResponse
from hobbylink.schemas.community import (
    CommunityCreate,
    CommunityDetail,
    CommunityListItem,
    CommunityResponse,
    CommunitySort,
)
from hobbylink.schemas.post import PostCreate, PostListItem, PostResponse
from hobbylink.services import community_service, post_service

from ..dependencies import CallerDep, IdentityDep, InvalidatorDep, SessionDep

router = APIRouter(prefix="/communities", tags=["communities"])


@router.get("/", response_model=list[CommunityListItem])
async def list_communities(
    db: SessionDep,
    caller: CallerDep,
    search: str | None = Query(None, description="Match against name or description"),
    hobby_id: list[int] | None = Query(None, description="Restrict to these hobbies"),
    mine: bool = Query(False, description="Only communities the caller belongs to"),
    sort: CommunitySort = Query("newest"),
    limit: int = Query(settings.community_page_size, ge=1, le=100),
) -> Sequence[Community]:
    """List communities, newest first by default."""
    return community_service.list_communities(
        db,
        caller=caller,
        search=search,
        hobby_ids=hobby_id,
        only_mine=mine,
        sort=sort,
        limit=limit,
    )


@router.post("/",
          response_model=CommunityResponse,
          status_code=status.HTTP_201_CREATED)
async def create_community(
    community_data: CommunityCreate,
    caller: CallerDep,
    db: SessionDep,
    identity: IdentityDep,
    invalidator: InvalidatorDep,
    response: Response,
) -> Community:
    """Create a new community; the caller becomes its admin."""
    community = await community_service.create_community(
        db,
        caller,
        name=community_data.name,
        description=community_data.description,
        hobby_id=community_data.hobby_id,
        identity=identity,
        invalidator=invalidator,
    )
    invalidator.apply(response)
    return community


@router.get("/{community_id}", response_model=CommunityDetail)
async def get_community(
    community_id: int,
    db: SessionDep,
    caller: CallerDep,
) -> CommunityDetail:
    """Get a community with its hobby, members and the caller's membership."""
    community = community_service.get_community(db, community_id)
    detail = CommunityDetail.model_validate(community)
    detail.is_member = community_service.is_member(db, community_id, caller)
    return detail


@router.post(
    "/{community_id}/join",
    response_model=SuccessResponse,
    status_code=status.HTTP_201_CREATED,
)
async def join_community(
    community_id: int,
    caller: CallerDep,
    db: SessionDep,
    identity: IdentityDep,
    invalidator: InvalidatorDep,
    response: Response,
) -> SuccessResponse:
    """Join a community as a regular member."""
    await community_service.join_community(
        db,
        caller,
        community_id,
        identity=identity,
        invalidator=invalidator,
    )
    invalidator.apply(response)
    return SuccessResponse()


@router.get("/{community_id}/posts", response_model=list[PostListItem])
async def get_community_posts(
    community_id: int,
    db: SessionDep,
) -> Sequence[Post]:
    """Get a community's published posts, newest first."""
    return post_service.get_posts(db, community_id)


@router.post(
    "/{community_id}/posts",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    community_id: int,
    post_data: PostCreate,
    caller: CallerDep,
    db: SessionDep,
    identity: IdentityDep,
    invalidator: InvalidatorDep,
    response: Response,
) -> Post:
    """Create a post in a community the caller belongs to."""
    post = await post_service.create_post(
        db,
        caller,
        title=post_data.title,
        content=post_data.content,
        community_id=community_id,
        tags=post_data.tags,
        identity=identity,
        invalidator=invalidator,
    )
    invalidator.apply(response)
    return post
