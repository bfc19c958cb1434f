"""Comment endpoints for the HobbyLink API."""

from __future__ import annotations

from fastapi import APIRouter, Response

from hobbylink.models import Comment
from hobbylink.schemas.comment import CommentCreate, CommentResponse
from hobbylink.schemas.common import SuccessResponse
from hobbylink.services import comment_service

from ..dependencies import CallerDep, IdentityDep, InvalidatorDep, SessionDep

router = APIRouter(prefix="/comments", tags=["comments"])


@router.put("/{comment_id}", response_model=CommentResponse)
async def edit_comment(
    comment_id: int,
    comment_data: CommentCreate,
    caller: CallerDep,
    db: SessionDep,
    identity: IdentityDep,
    invalidator: InvalidatorDep,
    response: Response,
) -> Comment:
    comment = await comment_service.edit_comment(
        db,
        caller,
        comment_id,
        comment_data.content,
        identity=identity,
        invalidator=invalidator,
    )
    invalidator.apply(response)
    return comment


@router.delete("/{comment_id}", response_model=SuccessResponse)
async def delete_comment(
    comment_id: int,
    caller: CallerDep,
    db: SessionDep,
    identity: IdentityDep,
    invalidator: InvalidatorDep,
    response: Response,
) -> SuccessResponse:
    await comment_service.delete_comment(
        db,
        caller,
        comment_id,
        identity=identity,
        invalidator=invalidator,
    )
    invalidator.apply(response)
    return SuccessResponse()
