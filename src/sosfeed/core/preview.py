"""Image preview decoding for the compose form."""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Optional

from sosfeed.core.models import Attachment

LOGGER = logging.getLogger(__name__)


def _read_data_url(attachment: Attachment) -> str:
    with attachment.path.open("rb") as handle:
        payload = base64.b64encode(handle.read()).decode("ascii")
    return f"data:{attachment.content_type};base64,{payload}"


class ImagePreview:
    """Decodes the attached image into a data URL.

    Every ``load`` or ``clear`` bumps a token; a decode that finishes after
    being superseded drops its result instead of overwriting the newer one.
    """

    def __init__(self) -> None:
        self.data_url: Optional[str] = None
        self._token = 0

    async def load(self, attachment: Optional[Attachment]) -> Optional[str]:
        self._token += 1
        token = self._token
        self.data_url = None
        if attachment is None or not attachment.is_image:
            return None

        # File IO stays off the event loop so typing keeps working.
        data_url = await asyncio.to_thread(_read_data_url, attachment)
        if token != self._token:
            LOGGER.debug("Discarding superseded preview for %s", attachment.filename)
            return None
        self.data_url = data_url
        return data_url

    def clear(self) -> None:
        self._token += 1
        self.data_url = None
