"""Paginated feed state (core domain).

Page 1 replaces the stored list, any later page is appended. Posts are
never deduplicated or removed within a session: if the server's paging
shifts between requests the same post can show up twice, and that is left
visible rather than silently patched.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, tzinfo
from typing import Any, Callable, List, Mapping, Optional

from sosfeed.core.categories import is_urgent
from sosfeed.core.errors import PostsApiError
from sosfeed.core.models import FeedPage, Post
from sosfeed.core.ports import PostsApiPort

LOGGER = logging.getLogger(__name__)

LOAD_FAILURE_MESSAGE = "Não foi possível carregar as publicações"
TIMESTAMP_FORMAT = "%d/%m/%Y, %H:%M:%S"

Listener = Callable[["FeedStore"], None]


def _text(record: Mapping[str, Any], key: str) -> str:
    value = record.get(key)
    return "" if value is None else str(value)


def compose_address(record: Mapping[str, Any]) -> str:
    """Return ``street, number - neighborhood, city - state``."""

    return (
        f"{_text(record, 'address')}, {_text(record, 'number')} - "
        f"{_text(record, 'neighborhood')}, {_text(record, 'city')} - {_text(record, 'state')}"
    )


def format_timestamp(raw: str, tz: Optional[tzinfo] = None) -> str:
    """Render an ISO timestamp the way pt-BR locales display it.

    Unparseable values are returned unchanged.
    """

    try:
        moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return raw
    return moment.astimezone(tz).strftime(TIMESTAMP_FORMAT)


def resolve_image(image_url: Optional[str], media_base_url: str) -> Optional[str]:
    if not image_url:
        return None
    if image_url.startswith(("http://", "https://")):
        return image_url
    return f"{media_base_url.rstrip('/')}/{image_url.lstrip('/')}"


def build_post(record: Mapping[str, Any], media_base_url: str, tz: Optional[tzinfo] = None) -> Post:
    """Map one raw Posts API record into the display-ready Post shape."""

    if not isinstance(record, Mapping):
        raise TypeError(f"Post record must be an object, got {type(record).__name__}")
    category = _text(record, "category")
    created_at = _text(record, "createdAt")
    return Post(
        id=int(record["id"]),
        author=_text(record, "title"),
        content=_text(record, "content"),
        address=compose_address(record),
        cep=_text(record, "cep"),
        phone=_text(record, "phone"),
        timestamp=format_timestamp(created_at, tz),
        created_at=created_at,
        category=category,
        urgent=is_urgent(category),
        image=resolve_image(record.get("imageUrl"), media_base_url),
    )


class FeedStore:
    """Owns the in-memory feed and its page counter.

    Loads are serialized through a lock so responses apply in the order they
    were requested; a slow page-1 reload can never wipe posts appended by a
    later page that was requested after it.
    """

    def __init__(
        self,
        posts_api: PostsApiPort,
        media_base_url: str,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self._posts_api = posts_api
        self._media_base_url = media_base_url
        self._tz = tz
        self._posts: List[Post] = []
        self._lock = asyncio.Lock()
        self._listeners: List[Listener] = []
        self.page = 1
        self.error: Optional[str] = None

    @property
    def posts(self) -> List[Post]:
        return list(self._posts)

    @property
    def is_loading(self) -> bool:
        return self._lock.locked()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    async def load_page(self, page: int) -> Optional[FeedPage]:
        """Fetch ``page`` and apply it. Returns None when the load failed."""

        async with self._lock:
            result = await self._fetch_and_apply(page)
        # Listeners run after the lock is released so is_loading reads False.
        self._notify()
        return result

    async def _fetch_and_apply(self, page: int) -> Optional[FeedPage]:
        try:
            records = await self._posts_api.fetch_page(page)
            posts = [build_post(record, self._media_base_url, self._tz) for record in records]
        except (PostsApiError, KeyError, TypeError, ValueError):
            LOGGER.exception("Failed to load feed page %s", page)
            self.error = LOAD_FAILURE_MESSAGE
            return None

        if page == 1:
            self._posts = posts
        else:
            self._posts.extend(posts)
        self.error = None
        LOGGER.info("Feed page %s applied (%s posts)", page, len(posts))
        return FeedPage(page=page, posts=posts)

    async def load_next_page(self) -> Optional[FeedPage]:
        """Load the page after the last applied one.

        The counter is read and advanced under the load lock and only on
        success, so a failed page is requested again by the next call even
        when several calls were queued behind it.
        """

        async with self._lock:
            requested = self.page + 1
            result = await self._fetch_and_apply(requested)
            if result is not None:
                self.page = requested
        self._notify()
        return result

    async def refresh(self) -> Optional[FeedPage]:
        async with self._lock:
            self.page = 1
            result = await self._fetch_and_apply(1)
        self._notify()
        return result
