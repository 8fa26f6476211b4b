"""Repository for comment collection operations."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as SchemaError

from mural.models.comment import Comment
from mural.store import JsonStore, comments_store

logger = logging.getLogger(__name__)


def _record_to_comment(record: dict[str, Any]) -> Comment | None:
    """Convert a stored object to a Comment, or None if it is malformed."""
    try:
        return Comment.model_validate(record)
    except SchemaError as e:
        logger.warning("comment_repo: skipping malformed record id=%r: %s", record.get("id"), e.error_count())
        return None


def _is_valid(record: dict[str, Any]) -> bool:
    try:
        Comment.model_validate(record)
    except SchemaError:
        return False
    return True


class CommentRepo:
    """Whole-collection reads and writes for comments. No partial updates."""

    def __init__(self, store: JsonStore | None = None) -> None:
        self._store = store

    @property
    def store(self) -> JsonStore:
        return self._store or comments_store()

    def list_all(self) -> list[Comment]:
        """Load every comment in storage order."""
        comments = (_record_to_comment(r) for r in self.store.read())
        return [c for c in comments if c is not None]

    def save_all(self, comments: list[Comment]) -> None:
        """
        Replace the stored collection with comments.

        Stored records that do not parse as a Comment are carried over unchanged
        at the end, so hand-edited data is never dropped by an unrelated write.
        """
        unparsed = [r for r in self.store.read() if not _is_valid(r)]
        if unparsed:
            logger.warning("comment_repo: keeping %d unparsed records on write", len(unparsed))
        self.store.write([c.to_record() for c in comments] + unparsed)
