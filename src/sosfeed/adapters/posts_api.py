"""Posts API adapter.

Implements the core PostsApiPort over HTTP with httpx. Every transport
error, timeout and non-2xx answer is translated into ``PostsApiError``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from sosfeed.core.errors import PostsApiError
from sosfeed.core.models import Attachment

LOGGER = logging.getLogger(__name__)

POSTS_PATH = "/api/posts"


def _truncate_body(body: str, limit: int = 300) -> str:
    if len(body) <= limit:
        return body
    return f"{body[:limit]}..."


class HttpPostsApi:
    """Async client for ``GET/POST /api/posts``."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"User-Agent": "sosfeed/1.0"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_page(self, page: int) -> List[Dict[str, Any]]:
        try:
            response = await self._client.get(POSTS_PATH, params={"page": page})
        except httpx.HTTPError as exc:
            raise PostsApiError(f"Posts API unreachable: {exc}") from exc
        self._raise_for_status(response)
        try:
            payload = response.json()
        except ValueError as exc:
            raise PostsApiError("Posts API returned invalid JSON", response.status_code) from exc
        if not isinstance(payload, list):
            raise PostsApiError("Posts API returned a non-list page", response.status_code)
        LOGGER.debug("Fetched page %s (%s records)", page, len(payload))
        return payload

    async def create_post(self, fields: Dict[str, str], image: Optional[Attachment]) -> None:
        # Text fields go in as filename-less parts so the body is multipart
        # even when no image is attached.
        parts: List[Tuple[str, Tuple[Optional[str], bytes, Optional[str]]]] = [
            (name, (None, value.encode("utf-8"), None)) for name, value in fields.items()
        ]
        if image is not None:
            try:
                content = await asyncio.to_thread(image.path.read_bytes)
            except OSError as exc:
                raise PostsApiError(f"Could not read attachment {image.filename}: {exc}") from exc
            parts.append(
                ("image", (image.filename, content, image.content_type or "application/octet-stream"))
            )
        try:
            response = await self._client.post(POSTS_PATH, files=parts)
        except httpx.HTTPError as exc:
            raise PostsApiError(f"Posts API unreachable: {exc}") from exc
        self._raise_for_status(response)

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        raise PostsApiError(
            f"Posts API error {response.status_code}: {_truncate_body(response.text)}",
            response.status_code,
        )
