"""Async client for the locations proxy endpoint."""

from __future__ import annotations

import logging

import httpx

from renderer.models import Item, Page

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when a collection page cannot be fetched through the proxy."""


class LocationsClient:
    """Reads collection pages and single items through the proxy.

    Args:
        api_url: URL of the proxy endpoint.  May be relative when
            *http_client* carries a ``base_url``.
        http_client: Shared async client; one is created (and owned) when omitted.
    """

    def __init__(self, api_url: str, http_client: httpx.AsyncClient | None = None) -> None:
        self.api_url = api_url
        self._client = http_client or httpx.AsyncClient()
        self._owns_client = http_client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "LocationsClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def fetch_page(self, offset: int = 0, limit: int = 100) -> Page:
        """Fetch one page of the default collection.

        Raises:
            FetchError: The proxy answered non-2xx or could not be reached.
        """
        try:
            resp = await self._client.get(
                self.api_url, params={"offset": str(offset), "limit": str(limit)}
            )
        except httpx.HTTPError as exc:
            logger.error("Error fetching collection items: %s", exc)
            raise FetchError(str(exc) or type(exc).__name__) from exc

        if resp.is_error:
            try:
                payload = resp.json()
            except ValueError:
                payload = None
            message = payload.get("error") if isinstance(payload, dict) else None
            raise FetchError(message or f"API request failed: {resp.status_code}")

        try:
            raw = resp.json()
        except ValueError as exc:
            raise FetchError(f"Invalid JSON from proxy: {exc}") from exc
        if not isinstance(raw, dict):
            raw = {}
        items = raw.get("items")
        return Page(
            items=[Item.from_raw(i) for i in items] if isinstance(items, list) else [],
            raw=raw,
        )

    async def fetch_item_by_id(self, collection_id: str | None,
                               item_id: str | None) -> Item | None:
        """Fetch a single item from any collection; ``None`` on any failure."""
        if not collection_id or not item_id:
            return None
        try:
            resp = await self._client.get(
                self.api_url, params={"collectionId": collection_id, "itemId": item_id}
            )
            if resp.is_error:
                logger.warning("Failed to fetch item %s: %d", item_id, resp.status_code)
                return None
            return Item.from_raw(resp.json())
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Error fetching item %s: %s", item_id, exc)
            return None
