"""Post models for the feed."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


def coerce_tags(value: Any) -> list[str]:
    """Accept a list, a bare string, or nothing."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    return [str(tag).strip() for tag in value if str(tag).strip()]


def coerce_counter(value: Any) -> int:
    return 0 if value is None else value


class Post(BaseModel):
    """
    Core post model. Represents one object in posts.json.

    JSON keys are camelCase; unknown keys on stored records are kept so a
    read/write cycle never drops data.
    """

    model_config = {"populate_by_name": True, "extra": "allow"}

    id: str
    title: str
    content: str  # rendered, sanitized HTML
    tags: list[str] = Field(default_factory=list)
    created_at: str = Field(alias="createdAt")  # ISO-8601
    likes: int = Field(default=0, ge=0)
    dislikes: int = Field(default=0, ge=0)

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> list[str]:
        return coerce_tags(value)

    @field_validator("likes", "dislikes", mode="before")
    @classmethod
    def _missing_counter_is_zero(cls, value: Any) -> int:
        return coerce_counter(value)

    def to_record(self) -> dict[str, Any]:
        """Serialize for storage (camelCase keys)."""
        return self.model_dump(by_alias=True)


class CreatePostRequest(BaseModel):
    """
    What the client sends to POST /api/posts.

    Fields are optional here so that a missing title or content is reported
    by the mutation service as a 400 rather than a schema error.
    """

    title: str | None = None
    content: str | None = None
    tags: list[str] | str | None = None


class ReactionsResponse(BaseModel):
    """Counters returned after a like or dislike."""

    likes: int
    dislikes: int
