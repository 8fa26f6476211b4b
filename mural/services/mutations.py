"""
Write-side service for posts and comments.

Every operation is a read-entire-collection → modify → write-entire-collection
cycle through the repositories. Nothing spans both collections atomically:
deleting a post writes posts.json and then comments.json, and a crash in
between leaves orphaned comments behind (the query engine ignores them).
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, Literal
from uuid import uuid4

from mural.errors import NotFoundError, ValidationError
from mural.models.comment import Comment
from mural.models.post import Post, ReactionsResponse, coerce_tags
from mural.repos.comment_repo import CommentRepo
from mural.repos.post_repo import PostRepo
from mural.services.renderer import render, sanitize

logger = logging.getLogger(__name__)

Reaction = Literal["like", "dislike"]


def _new_id() -> str:
    return uuid4().hex


def _now() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _apply_reaction(target: Post | Comment, reaction: Reaction) -> ReactionsResponse:
    if reaction == "like":
        target.likes += 1
    else:
        target.dislikes += 1
    return ReactionsResponse(likes=target.likes, dislikes=target.dislikes)


class MutationService:
    """Creates, deletes and reacts to posts and comments."""

    def __init__(self, post_repo: PostRepo | None = None, comment_repo: CommentRepo | None = None) -> None:
        self.post_repo = post_repo or PostRepo()
        self.comment_repo = comment_repo or CommentRepo()

    # ── posts ───────────────────────────────────────────────────────────────

    def create_post(self, title: str | None, content: str | None, tags: Any = None) -> Post:
        """
        Create a post and put it at the front of the collection.

        Args:
            title: Plain-text title (escaped, no markup)
            content: Markdown body (rendered and sanitized)
            tags: A list of tags, a single tag, or None

        Returns:
            The created Post

        Raises:
            ValidationError: title or content is empty after trimming
        """
        clean_title = sanitize(title)
        clean_content = render(content)
        if not clean_title or not clean_content:
            raise ValidationError("Título e conteúdo são obrigatórios")

        post = Post(
            id=_new_id(),
            title=clean_title,
            content=clean_content,
            tags=coerce_tags(tags),
            created_at=_now(),
        )

        posts = self.post_repo.list_all()
        posts.insert(0, post)
        self.post_repo.save_all(posts)
        logger.info("mutations: created post id=%s tags=%s", post.id, post.tags)
        return post

    def delete_post(self, post_id: str) -> int:
        """
        Delete a post and cascade to its comments.

        Returns:
            Number of comments removed along with the post

        Raises:
            NotFoundError: no post has this id
        """
        posts = self.post_repo.list_all()
        remaining = [p for p in posts if p.id != post_id]
        if len(remaining) == len(posts):
            raise NotFoundError("Post não encontrado")
        self.post_repo.save_all(remaining)

        comments = self.comment_repo.list_all()
        kept = [c for c in comments if c.post_id != post_id]
        self.comment_repo.save_all(kept)

        removed = len(comments) - len(kept)
        logger.info("mutations: deleted post id=%s with %d comments", post_id, removed)
        return removed

    def react_to_post(self, post_id: str, reaction: Reaction) -> ReactionsResponse:
        """Increment likes or dislikes on a post by one."""
        posts = self.post_repo.list_all()
        post = next((p for p in posts if p.id == post_id), None)
        if post is None:
            raise NotFoundError("Post não encontrado")
        counters = _apply_reaction(post, reaction)
        self.post_repo.save_all(posts)
        return counters

    def like_post(self, post_id: str) -> ReactionsResponse:
        return self.react_to_post(post_id, "like")

    def dislike_post(self, post_id: str) -> ReactionsResponse:
        return self.react_to_post(post_id, "dislike")

    # ── comments ────────────────────────────────────────────────────────────

    def create_comment(self, post_id: str, text: str | None) -> Comment:
        """
        Append a comment to a post's thread.

        The post id is not checked against the post collection.

        Raises:
            ValidationError: text is empty after trimming
        """
        clean_text = render(text)
        if not clean_text:
            raise ValidationError("Texto do comentário é obrigatório")

        comment = Comment(
            id=_new_id(),
            post_id=post_id,
            text=clean_text,
            created_at=_now(),
        )

        comments = self.comment_repo.list_all()
        comments.append(comment)
        self.comment_repo.save_all(comments)
        logger.info("mutations: created comment id=%s on post id=%s", comment.id, post_id)
        return comment

    def react_to_comment(self, comment_id: str, reaction: Reaction) -> ReactionsResponse:
        """Increment likes or dislikes on a comment by one."""
        comments = self.comment_repo.list_all()
        comment = next((c for c in comments if c.id == comment_id), None)
        if comment is None:
            raise NotFoundError("Comentário não encontrado")
        counters = _apply_reaction(comment, reaction)
        self.comment_repo.save_all(comments)
        return counters

    def like_comment(self, comment_id: str) -> ReactionsResponse:
        return self.react_to_comment(comment_id, "like")

    def dislike_comment(self, comment_id: str) -> ReactionsResponse:
        return self.react_to_comment(comment_id, "dislike")
