"""Repository for post collection operations."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as SchemaError

from mural.models.post import Post
from mural.store import JsonStore, posts_store

logger = logging.getLogger(__name__)


def _record_to_post(record: dict[str, Any]) -> Post | None:
    """Convert a stored object to a Post, or None if it is malformed."""
    try:
        return Post.model_validate(record)
    except SchemaError as e:
        logger.warning("post_repo: skipping malformed record id=%r: %s", record.get("id"), e.error_count())
        return None


def _is_valid(record: dict[str, Any]) -> bool:
    try:
        Post.model_validate(record)
    except SchemaError:
        return False
    return True


class PostRepo:
    """Whole-collection reads and writes for posts. No partial updates."""

    def __init__(self, store: JsonStore | None = None) -> None:
        self._store = store

    @property
    def store(self) -> JsonStore:
        # Resolved lazily so the data dir follows the current settings.
        return self._store or posts_store()

    def list_all(self) -> list[Post]:
        """Load every post in storage order."""
        posts = (_record_to_post(r) for r in self.store.read())
        return [p for p in posts if p is not None]

    def save_all(self, posts: list[Post]) -> None:
        """
        Replace the stored collection with posts.

        Stored records that do not parse as a Post are carried over unchanged
        at the end, so hand-edited data is never dropped by an unrelated write.
        """
        unparsed = [r for r in self.store.read() if not _is_valid(r)]
        if unparsed:
            logger.warning("post_repo: keeping %d unparsed records on write", len(unparsed))
        self.store.write([p.to_record() for p in posts] + unparsed)
