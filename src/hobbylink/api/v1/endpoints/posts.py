"""Post-related endpoints for the HobbyLink API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response, status

from hobbylink.models import Comment, Post
from hobbylink.schemas.comment import CommentCreate, CommentResponse
from hobbylink.schemas.common import LikeToggleResponse, SuccessResponse
from hobbylink.schemas.post import PostDetail, PostResponse, PostUpdate
from hobbylink.services import comment_service, post_service

from ..dependencies import CallerDep, IdentityDep, InvalidatorDep, SessionDep

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/{post_id}", response_model=PostDetail)
async def get_post(post_id: int, db: SessionDep) -> Post:
    """Get a post with its author, comments and likes."""
    post = post_service.get_post_by_id(db, post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post


@router.put("/{post_id}", response_model=PostResponse)
async def edit_post(
    post_id: int,
    post_data: PostUpdate,
    caller: CallerDep,
    db: SessionDep,
    identity: IdentityDep,
    invalidator: InvalidatorDep,
    response: Response,
) -> Post:
    """Edit the caller's own post."""
    post = await post_service.edit_post(
        db,
        caller,
        post_id,
        title=post_data.title,
        content=post_data.content,
        tags=post_data.tags,
        identity=identity,
        invalidator=invalidator,
    )
    invalidator.apply(response)
    return post


@router.delete("/{post_id}", response_model=SuccessResponse)
async def delete_post(
    post_id: int,
    caller: CallerDep,
    db: SessionDep,
    identity: IdentityDep,
    invalidator: InvalidatorDep,
    response: Response,
) -> SuccessResponse:
    """Delete a post; allowed for its author and community admins."""
    await post_service.delete_post(
        db,
        caller,
        post_id,
        identity=identity,
        invalidator=invalidator,
    )
    invalidator.apply(response)
    return SuccessResponse()


@router.post("/{post_id}/like", response_model=LikeToggleResponse)
async def like_post(
    post_id: int,
    caller: CallerDep,
    db: SessionDep,
    identity: IdentityDep,
    invalidator: InvalidatorDep,
    response: Response,
) -> LikeToggleResponse:
    """Like the post, or remove the caller's like if already present."""
    liked = await post_service.like_post(
        db,
        caller,
        post_id,
        identity=identity,
        invalidator=invalidator,
    )
    invalidator.apply(response)
    return LikeToggleResponse(liked=liked)


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    comment_data: CommentCreate,
    caller: CallerDep,
    db: SessionDep,
    identity: IdentityDep,
    invalidator: InvalidatorDep,
    response: Response,
) -> Comment:
    """Comment on a post in a community the caller belongs to."""
    comment = await comment_service.create_comment(
        db,
        caller,
        post_id,
        comment_data.content,
        identity=identity,
        invalidator=invalidator,
    )
    invalidator.apply(response)
    return comment
