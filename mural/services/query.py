"""
Read-side query engine for the feed.

Pure functions over fully loaded collections: filter by tag and search term,
sort by one criterion, then slice a page. Nothing here raises on bad input;
unknown sort keys and malformed paging values fall back to defaults.

Every sort is stable. Python's sorted() keeps equal keys in input order even
with reverse=True, so ties always come out in storage order.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from mural.config import settings
from mural.models.comment import Comment
from mural.models.post import Post
from mural.services.renderer import to_plain_text

_EARLIEST = datetime.min.replace(tzinfo=UTC)

DEFAULT_SORT = "recent"

# criterion -> (field, descending)
SORT_CRITERIA: dict[str, tuple[str, bool]] = {
    "recent": ("created_at", True),
    "oldest": ("created_at", False),
    "most_likes": ("likes", True),
    "fewest_likes": ("likes", False),
    "most_dislikes": ("dislikes", True),
    "fewest_dislikes": ("dislikes", False),
    "most_comments": ("comment_count", True),
    "fewest_comments": ("comment_count", False),
}

# Labels the web client puts in its sort <select>
SORT_LABELS: dict[str, str] = {
    "Mais recentes": "recent",
    "Mais antigos": "oldest",
    "Maior número de likes": "most_likes",
    "Menor número de likes": "fewest_likes",
    "Maior número de dislikes": "most_dislikes",
    "Menor número de dislikes": "fewest_dislikes",
    "Maior número de comentários": "most_comments",
    "Menor número de comentários": "fewest_comments",
}


def resolve_sort(sort: str | None) -> str:
    """Map a raw sort value (key or client label) to a criterion name."""
    if not sort:
        return DEFAULT_SORT
    if sort in SORT_CRITERIA:
        return sort
    return SORT_LABELS.get(sort, DEFAULT_SORT)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are UTC, garbage sorts first."""
    try:
        ts = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return _EARLIEST
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def _coerce_count(value: Any, default: int, minimum: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= minimum else default


@dataclass(frozen=True)
class PostQuery:
    """One feed request: filters, sort, and page window."""

    tag: str | None = None
    search: str | None = None
    sort: str = DEFAULT_SORT
    limit: int = settings.DEFAULT_POST_LIMIT
    skip: int = 0

    @classmethod
    def from_params(
        cls,
        tag: str | None = None,
        search: str | None = None,
        sort: str | None = None,
        limit: Any = None,
        skip: Any = None,
    ) -> PostQuery:
        """Build a query from raw request parameters, defaulting anything invalid."""
        return cls(
            tag=tag or None,
            search=search or None,
            sort=resolve_sort(sort),
            limit=_coerce_count(limit, settings.DEFAULT_POST_LIMIT, minimum=1),
            skip=_coerce_count(skip, 0, minimum=0),
        )

    @property
    def needs_comment_counts(self) -> bool:
        return SORT_CRITERIA[self.sort][0] == "comment_count"


def paginate(items: list[Any], limit: Any, skip: Any, default_limit: int) -> list[Any]:
    """Skip then take up to limit items."""
    limit = _coerce_count(limit, default_limit, minimum=1)
    skip = _coerce_count(skip, 0, minimum=0)
    return items[skip : skip + limit]


def comment_counts(comments: Iterable[Comment]) -> Counter[str]:
    """Number of comments per post id."""
    return Counter(c.post_id for c in comments)


def _mentions(post: Post, term: str) -> bool:
    """Case-insensitive match on the text the author wrote, not the stored markup."""
    return term in to_plain_text(post.title).lower() or term in to_plain_text(post.content).lower()


def _filter_posts(posts: Iterable[Post], tag: str | None, search: str | None) -> list[Post]:
    if tag and tag not in settings.TAG_SENTINELS:
        posts = [p for p in posts if tag in p.tags]
    if search:
        term = search.lower()
        posts = [p for p in posts if _mentions(p, term)]
    return list(posts)


def _sort_key(field: str, counts: Counter[str]) -> Callable[[Post], Any]:
    if field == "created_at":
        return lambda p: parse_timestamp(p.created_at)
    if field == "comment_count":
        return lambda p: counts[p.id]
    return lambda p: getattr(p, field) or 0


def sort_posts(posts: list[Post], sort: str | None, comments: Iterable[Comment] | None = None) -> list[Post]:
    """Stable sort by the resolved criterion."""
    field, descending = SORT_CRITERIA[resolve_sort(sort)]
    counts = comment_counts(comments or []) if field == "comment_count" else Counter()
    return sorted(posts, key=_sort_key(field, counts), reverse=descending)


def list_posts(posts: list[Post], query: PostQuery, comments: Iterable[Comment] | None = None) -> list[Post]:
    """
    Produce one page of the feed.

    Args:
        posts: The full post collection
        query: Filters, sort and page window
        comments: The full comment collection; only consulted for comment-count sorts

    Returns:
        Posts matching the filters, sorted, sliced to [skip, skip + limit)
    """
    matching = _filter_posts(posts, query.tag, query.search)
    ordered = sort_posts(matching, query.sort, comments)
    return paginate(ordered, query.limit, query.skip, settings.DEFAULT_POST_LIMIT)


def list_comments(comments: list[Comment], post_id: str, limit: Any = None, skip: Any = None) -> list[Comment]:
    """Newest-first page of one post's comments."""
    thread = [c for c in comments if c.post_id == post_id]
    thread = sorted(thread, key=lambda c: parse_timestamp(c.created_at), reverse=True)
    return paginate(thread, limit, skip, settings.DEFAULT_COMMENT_LIMIT)
