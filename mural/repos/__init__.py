"""
Repository layer for Mural.

All collection reads and writes live here and ONLY here. No store access
outside this module.
"""

from mural.repos.comment_repo import CommentRepo
from mural.repos.post_repo import PostRepo

__all__ = [
    "PostRepo",
    "CommentRepo",
]
