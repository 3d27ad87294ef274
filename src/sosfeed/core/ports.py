"""Ports (interfaces) used by the core state containers.

Ports define the minimal contracts for the external collaborators so that
the core can be reused with different clients or test fakes.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from sosfeed.core.models import Attachment, Coordinates, PostalAddress


class PostsApiPort(Protocol):
    """Posts API operations. Failures raise ``PostsApiError``."""

    async def fetch_page(self, page: int) -> List[Dict[str, Any]]:
        ...

    async def create_post(self, fields: Dict[str, str], image: Optional[Attachment]) -> None:
        ...


class PostalLookupPort(Protocol):
    """Postal-code lookup. ``None`` means the code is unknown."""

    async def lookup(self, digits: str) -> Optional[PostalAddress]:
        ...


class GeolocatorPort(Protocol):
    """Device position. Raises ``GeolocationDenied`` on refusal."""

    async def current_position(self) -> Coordinates:
        ...


class ReverseGeocoderPort(Protocol):
    """Coordinates to address. Raises ``GeolocationError`` on failure."""

    async def resolve(self, coordinates: Coordinates) -> PostalAddress:
        ...
