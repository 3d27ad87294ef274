"""Free-text feed filtering (core domain)."""

from __future__ import annotations

from typing import Iterable, List

from sosfeed.core.categories import category_style
from sosfeed.core.models import Post


def post_matches(post: Post, query: str) -> bool:
    """Case-insensitive substring match over the searchable post fields."""

    lowered = query.lower()
    return any(
        lowered in value.lower()
        for value in (post.content, post.address, post.author, category_style(post.category).label)
    )


def filter_posts(posts: Iterable[Post], query: str) -> List[Post]:
    """Return posts matching ``query`` in their original order.

    The source sequence is never mutated; an empty query returns a copy of
    everything.
    """

    if not query:
        return list(posts)
    return [post for post in posts if post_matches(post, query)]
