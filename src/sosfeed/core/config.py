"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ServiceConfig:
    """Base addresses and timeout for the external HTTP collaborators."""

    posts_api_url: str
    media_base_url: str
    postal_lookup_url: str
    timeout_seconds: float


@dataclass(frozen=True)
class GeolocationConfig:
    """Device position used by the static geolocation adapter.

    Missing coordinates mean the capability is absent.
    """

    latitude: Optional[float]
    longitude: Optional[float]
    timeout_seconds: float

    @property
    def available(self) -> bool:
        return self.latitude is not None and self.longitude is not None
