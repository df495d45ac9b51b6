"""HTTP client for the upstream creature catalog (PokeAPI)."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from pokedex.services.errors import (
    CatalogHTTPStatusError,
    CatalogNetworkError,
    CatalogNormalizationError,
    CatalogTimeoutError,
)
from pokedex.settings import DEFAULT_POKEAPI_BASE_URL, DEFAULT_POKEAPI_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class PokeApiClient:
    """Bounded-timeout access to ``/pokemon`` list and detail resources.

    Every failure leaves this class as a :class:`~pokedex.services.errors.CatalogFetchError`
    subclass; raw ``httpx`` exceptions never reach the caller. An injected
    ``client`` stays owned by whoever created it.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_POKEAPI_BASE_URL,
        timeout_seconds: float = DEFAULT_POKEAPI_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        if client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout_seconds),
                follow_redirects=True,
                headers={"Accept": "application/json"},
            )
        else:
            self._client = client
        self._client_owner = client is None

    async def fetch_list(self, *, offset: int, limit: int) -> dict[str, Any]:
        """Return the raw ``{count, results}`` page starting at ``offset``."""

        return await self._get_json(
            f"{self._base_url}/pokemon",
            params={"offset": offset, "limit": limit},
        )

    async def fetch_detail(self, identifier: str | int) -> dict[str, Any]:
        """Return the raw nested payload for one record (id or name)."""

        encoded = quote(str(identifier), safe="")
        return await self._get_json(f"{self._base_url}/pokemon/{encoded}")

    async def aclose(self) -> None:
        if self._client_owner:
            await self._client.aclose()

    async def _get_json(
        self, url: str, *, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        try:
            response = await self._client.get(url, params=params)
        except httpx.TimeoutException as exc:
            logger.error("PokeAPI request timed out: url=%s error=%s", url, exc)
            raise CatalogTimeoutError(f"Timed out fetching {url}") from exc
        except httpx.HTTPError as exc:
            logger.error("PokeAPI request failed: url=%s error=%s", url, exc)
            raise CatalogNetworkError(f"Failed to fetch {url}: {exc}") from exc

        if not response.is_success:
            logger.error(
                "PokeAPI request failed: url=%s status=%s", url, response.status_code
            )
            raise CatalogHTTPStatusError(response.status_code, url)

        try:
            payload = response.json()
        except ValueError as exc:
            raise CatalogNormalizationError(f"Non-JSON payload from {url}") from exc
        if not isinstance(payload, dict):
            raise CatalogNormalizationError(f"Unexpected payload type from {url}")
        return payload


__all__ = ["PokeApiClient"]
