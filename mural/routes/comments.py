"""Comment reaction routes."""

from __future__ import annotations

from fastapi import APIRouter

from mural.models.post import ReactionsResponse
from mural.services.mutations import MutationService

router = APIRouter(prefix="/api/comments", tags=["comments"])
mutations = MutationService()


@router.post("/{comment_id}/like", status_code=200)
async def like_comment(comment_id: str) -> ReactionsResponse:
    return mutations.like_comment(comment_id)


@router.post("/{comment_id}/dislike", status_code=200)
async def dislike_comment(comment_id: str) -> ReactionsResponse:
    return mutations.dislike_comment(comment_id)
