"""
Flat JSON file storage for posts and comments.

Each collection is one JSON array on disk, read and written whole. There is no
locking: two requests mutating the same collection concurrently can both read
the old state and the later write wins. Reads degrade to an empty collection on
any failure; writes are allowed to raise.

All file access goes through JsonStore. Never open the data files elsewhere.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from mural.config import settings

logger = logging.getLogger(__name__)


class JsonStore:
    """One collection persisted as a top-level JSON array."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def ensure(self) -> None:
        """Create the data directory and an empty collection file if absent."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.write([])
            logger.info("store: initialized %s", self.path)

    def read(self) -> list[dict[str, Any]]:
        """
        Load the whole collection.

        Returns an empty list when the file is missing, unreadable, not JSON,
        or not an array of objects. Never raises.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw)
        except (OSError, ValueError) as e:
            logger.warning("store: failed to read %s, treating as empty: %s", self.path, e)
            return []

        if not isinstance(data, list):
            logger.warning("store: %s is not a JSON array, treating as empty", self.path)
            return []
        return [record for record in data if isinstance(record, dict)]

    def write(self, records: list[dict[str, Any]]) -> None:
        """
        Replace the whole collection on disk (2-space indent).

        The new content goes to a temp file in the same directory which is then
        renamed over the target, so readers see either the old or the new array.
        """
        payload = json.dumps(records, indent=2, ensure_ascii=False)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def posts_store() -> JsonStore:
    return JsonStore(settings.POSTS_FILE)


def comments_store() -> JsonStore:
    return JsonStore(settings.COMMENTS_FILE)


def init_store() -> None:
    """
    Make sure both collection files exist.
    Called once at application startup.
    """
    posts_store().ensure()
    comments_store().ensure()
