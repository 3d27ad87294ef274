"""Address resolution for the compose form.

Two strategies fill the address fields:
1) Postal-code lookup, fired when the masked CEP reaches 8 digits
2) Geolocation fallback, fired explicitly by the user

Lookup failures are silent (logged only) so a third-party outage never
blocks the user from typing the address by hand. Geolocation failures are
raised with a message meant for the user.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from sosfeed.core.draft import DraftForm
from sosfeed.core.errors import (
    GeolocationError,
    GeolocationUnsupported,
    LocationFailed,
    PostalLookupError,
)
from sosfeed.core.formatting import postal_code_digits
from sosfeed.core.ports import GeolocatorPort, PostalLookupPort, ReverseGeocoderPort

LOGGER = logging.getLogger(__name__)

FORMATTED_CEP_LENGTH = 9


class AddressResolver:
    """Fills the draft's address fields from a CEP or from the device position."""

    def __init__(
        self,
        form: DraftForm,
        postal_lookup: PostalLookupPort,
        geolocator: Optional[GeolocatorPort],
        reverse_geocoder: ReverseGeocoderPort,
        geolocation_timeout: float = 10.0,
    ) -> None:
        self._form = form
        self._postal_lookup = postal_lookup
        self._geolocator = geolocator
        self._reverse_geocoder = reverse_geocoder
        self._geolocation_timeout = geolocation_timeout
        self._lookup_token = 0
        self.is_loading_postal_code = False
        self.is_locating = False

    @property
    def geolocation_supported(self) -> bool:
        return self._geolocator is not None

    async def handle_postal_code_input(self, raw: str) -> str:
        """Mask the typed CEP into the draft and look it up once complete."""

        formatted = self._form.edit_postal_code(raw)
        if len(formatted) == FORMATTED_CEP_LENGTH:
            await self.lookup(formatted)
        return formatted

    async def lookup(self, cep: str) -> bool:
        """Resolve ``cep`` and apply it. Returns True when fields changed."""

        # Only the most recent lookup may write; an older one finishing late
        # would clobber the address of the CEP the user typed afterwards.
        self._lookup_token += 1
        token = self._lookup_token
        self.is_loading_postal_code = True
        try:
            address = await self._postal_lookup.lookup(postal_code_digits(cep))
        except PostalLookupError:
            LOGGER.warning("Postal lookup failed for %s", cep, exc_info=True)
            return False
        finally:
            if token == self._lookup_token:
                self.is_loading_postal_code = False

        if token != self._lookup_token:
            LOGGER.debug("Discarding superseded postal lookup for %s", cep)
            return False
        if address is None:
            LOGGER.info("Postal code %s not found; keeping manual address", cep)
            return False

        self._form.apply_address(address)
        return True

    async def locate(self) -> bool:
        """Fill the address from the device position.

        Raises ``GeolocationUnsupported`` before touching any state when the
        capability is missing, and ``LocationFailed`` for every failure after
        the request started. Returns False when a request is already running.
        """

        if self._geolocator is None:
            raise GeolocationUnsupported("Geolocalização não é suportada neste dispositivo")
        if self.is_locating:
            return False

        self.is_locating = True
        try:
            try:
                coordinates = await asyncio.wait_for(
                    self._geolocator.current_position(), timeout=self._geolocation_timeout
                )
            except asyncio.TimeoutError as exc:
                raise LocationFailed("Erro ao obter localização: tempo esgotado") from exc
            except GeolocationError as exc:
                raise LocationFailed(f"Erro ao obter localização: {exc}") from exc

            try:
                address = await self._reverse_geocoder.resolve(coordinates)
            except GeolocationError as exc:
                raise LocationFailed("Erro ao obter endereço da localização") from exc
        finally:
            self.is_locating = False

        self._form.apply_address(address, include_postal_code=True)
        LOGGER.info("Address filled from device position")
        return True
