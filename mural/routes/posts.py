"""Post routes: list, create, delete, like, dislike, plus the comment thread of a post."""

from __future__ import annotations

from fastapi import APIRouter

from mural.models.comment import Comment, CreateCommentRequest
from mural.models.post import CreatePostRequest, Post, ReactionsResponse
from mural.repos.comment_repo import CommentRepo
from mural.repos.post_repo import PostRepo
from mural.services.mutations import MutationService
from mural.services.query import PostQuery, list_comments, list_posts

router = APIRouter(prefix="/api/posts", tags=["posts"])
post_repo = PostRepo()
comment_repo = CommentRepo()
mutations = MutationService(post_repo, comment_repo)


@router.get("", status_code=200)
async def get_posts(
    tag: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    limit: str | None = None,
    skip: str | None = None,
) -> list[Post]:
    """
    One page of the feed.

    Paging values arrive as raw strings so that junk like limit=abc falls back
    to the default instead of failing validation.
    """
    query = PostQuery.from_params(tag=tag, search=search, sort=sort, limit=limit, skip=skip)
    comments = comment_repo.list_all() if query.needs_comment_counts else None
    return list_posts(post_repo.list_all(), query, comments)


@router.post("", status_code=201)
async def create_post(req: CreatePostRequest) -> Post:
    """Create a new post."""
    return mutations.create_post(req.title, req.content, req.tags)


@router.delete("/{post_id}", status_code=200)
async def delete_post(post_id: str) -> dict[str, str]:
    """Permanently delete a post and every comment on it."""
    mutations.delete_post(post_id)
    return {"message": "Post deletado com sucesso"}


@router.post("/{post_id}/like", status_code=200)
async def like_post(post_id: str) -> ReactionsResponse:
    return mutations.like_post(post_id)


@router.post("/{post_id}/dislike", status_code=200)
async def dislike_post(post_id: str) -> ReactionsResponse:
    return mutations.dislike_post(post_id)


@router.get("/{post_id}/comments", status_code=200)
async def get_comments(post_id: str, limit: str | None = None, skip: str | None = None) -> list[Comment]:
    """Newest-first page of comments for a post."""
    return list_comments(comment_repo.list_all(), post_id, limit=limit, skip=skip)


@router.post("/{post_id}/comments", status_code=201)
async def create_comment(post_id: str, req: CreateCommentRequest) -> Comment:
    """Add a comment to a post."""
    return mutations.create_comment(post_id, req.text)
