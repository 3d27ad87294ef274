"""ViaCEP postal lookup adapter.

Implements PostalLookupPort: ``GET /{cep}/json/``. An ``erro`` flag in the
body means the code is unknown and maps to ``None``; anything else that
goes wrong raises ``PostalLookupError``.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from sosfeed.core.errors import PostalLookupError
from sosfeed.core.models import PostalAddress

LOGGER = logging.getLogger(__name__)


class ViaCepLookup:
    """Async ViaCEP client."""

    def __init__(
        self,
        base_url: str = "https://viacep.com.br/ws",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def lookup(self, digits: str) -> Optional[PostalAddress]:
        try:
            response = await self._client.get(f"/{digits}/json/")
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise PostalLookupError(f"Lookup failed for {digits}: {exc}") from exc

        if not isinstance(data, dict):
            raise PostalLookupError(f"Unexpected lookup body for {digits}")
        # ViaCEP has answered both a boolean and the string "true" here.
        if data.get("erro") in (True, "true"):
            LOGGER.debug("ViaCEP has no record for %s", digits)
            return None

        return PostalAddress(
            cep=str(data.get("cep") or digits),
            street=str(data.get("logradouro") or ""),
            neighborhood=str(data.get("bairro") or ""),
            city=str(data.get("localidade") or ""),
            state=str(data.get("uf") or ""),
        )
