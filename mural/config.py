"""
Mural configuration: all environment variables in one place.

Read from environment at runtime. Data paths are resolved on every access so a
changed MURAL_DATA_DIR (tests, one-off scripts) takes effect without a reload.
"""

from __future__ import annotations

import os
from pathlib import Path


class Settings:
    """Application settings from environment variables."""

    # Pagination defaults
    DEFAULT_POST_LIMIT: int = 5
    DEFAULT_COMMENT_LIMIT: int = 3

    # Filter value meaning "no tag filter" (the client sends "todas")
    TAG_SENTINELS: frozenset[str] = frozenset({"all", "todas"})

    @property
    def DATA_DIR(self) -> Path:
        return Path(os.environ.get("MURAL_DATA_DIR", "data"))

    @property
    def POSTS_FILE(self) -> Path:
        return self.DATA_DIR / "posts.json"

    @property
    def COMMENTS_FILE(self) -> Path:
        return self.DATA_DIR / "comments.json"

    @property
    def CORS_ORIGINS(self) -> list[str]:
        raw = os.environ.get("MURAL_CORS_ORIGINS", "*")
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @property
    def LOG_LEVEL(self) -> str:
        return os.environ.get("MURAL_LOG_LEVEL", "INFO").upper()

    @property
    def ENVIRONMENT(self) -> str:
        return os.environ.get("ENVIRONMENT", "development")

    @property
    def HOST(self) -> str:
        return os.environ.get("MURAL_HOST", "127.0.0.1")

    @property
    def PORT(self) -> int:
        return int(os.environ.get("MURAL_PORT", "3000"))


# Singleton instance
settings = Settings()
