"""Geolocation adapters.

A terminal has no platform position API, so the device position comes from
configuration. Reverse geocoding is not integrated with any service yet and
always answers with the reference address below.
"""

from __future__ import annotations

from typing import Optional

from sosfeed.core.config import GeolocationConfig
from sosfeed.core.models import Coordinates, PostalAddress

REFERENCE_ADDRESS = PostalAddress(
    cep="01310-100",
    street="Av. Paulista",
    number="1000",
    neighborhood="Bela Vista",
    city="São Paulo",
    state="SP",
)


class StaticGeolocator:
    """GeolocatorPort answering with a fixed, configured position."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self._coordinates = Coordinates(latitude=latitude, longitude=longitude)

    async def current_position(self) -> Coordinates:
        return self._coordinates


class FixedAddressGeocoder:
    """ReverseGeocoderPort that resolves every position to one address."""

    def __init__(self, address: PostalAddress = REFERENCE_ADDRESS) -> None:
        self._address = address

    async def resolve(self, coordinates: Coordinates) -> PostalAddress:
        return self._address


def build_geolocator(config: GeolocationConfig) -> Optional[StaticGeolocator]:
    """Return the geolocator, or None when the capability is absent."""

    if not config.available:
        return None
    return StaticGeolocator(float(config.latitude), float(config.longitude))
