"""Comment models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from mural.models.post import coerce_counter


class Comment(BaseModel):
    """Core comment model. Represents one object in comments.json."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    id: str
    post_id: str = Field(alias="postId")
    text: str  # rendered, sanitized HTML
    created_at: str = Field(alias="createdAt")
    likes: int = Field(default=0, ge=0)
    dislikes: int = Field(default=0, ge=0)

    @field_validator("likes", "dislikes", mode="before")
    @classmethod
    def _missing_counter_is_zero(cls, value: Any) -> int:
        return coerce_counter(value)

    def to_record(self) -> dict[str, Any]:
        """Serialize for storage (camelCase keys)."""
        return self.model_dump(by_alias=True)


class CreateCommentRequest(BaseModel):
    """What the client sends to POST /api/posts/{post_id}/comments."""

    text: str | None = None
