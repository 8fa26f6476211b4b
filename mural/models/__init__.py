"""
Pydantic models for Mural.

All data shapes defined here. No imports from store, repos, or routes.
"""

from mural.models.comment import Comment, CreateCommentRequest
from mural.models.post import CreatePostRequest, Post, ReactionsResponse

__all__ = [
    # Post models
    "Post",
    "CreatePostRequest",
    "ReactionsResponse",
    # Comment models
    "Comment",
    "CreateCommentRequest",
]
