"""
Proxy gateway for the Webflow CMS API.

Translates one inbound request into exactly one upstream request, attaching
the server-held bearer token, and relays the upstream status and JSON body
back unchanged.  The gateway is schema-agnostic: any collection can be
proxied, and payloads are never reshaped.

Every response, success or failure, carries CORS_HEADERS so cross-origin
callers can read error bodies.
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import quote

import requests

from utils.config import GatewayConfig
from utils.http import SessionManager

logger = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "86400",
    "Content-Type": "application/json",
}


# ── Errors ────────────────────────────────────────────────────────────────────

class GatewayError(Exception):
    """Base class for failures that map onto an HTTP error response."""

    status_code = 500

    def to_body(self) -> dict[str, Any]:
        return {"error": str(self)}


class MethodNotAllowedError(GatewayError):
    """Raised for any verb other than GET or OPTIONS."""

    status_code = 405

    def __init__(self, method: str) -> None:
        super().__init__("Method not allowed. Only GET requests are supported.")
        self.method = method


class ConfigurationError(GatewayError):
    """Raised when the server is missing required configuration."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Server configuration error. {message}")


class UpstreamError(GatewayError):
    """Raised when the CMS API answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, details: str) -> None:
        super().__init__(f"Webflow API error: {status_code} {reason}".rstrip())
        self.status_code = status_code
        self.details = details

    def to_body(self) -> dict[str, Any]:
        return {"error": str(self), "details": self.details}


class InternalError(GatewayError):
    """Raised when no upstream response could be obtained or decoded."""

    def __init__(self, cause: BaseException, include_stack: bool = False) -> None:
        super().__init__("Internal server error")
        self.cause = cause
        self.include_stack = include_stack

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": str(self), "message": str(self.cause)}
        if self.include_stack:
            body["stack"] = "".join(traceback.format_exception(
                type(self.cause), self.cause, self.cause.__traceback__
            ))
        return body


# ── Responses ─────────────────────────────────────────────────────────────────

@dataclass
class GatewayResponse:
    """Status, JSON body and headers for one gateway reply."""

    status_code: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=lambda: dict(CORS_HEADERS))

    @classmethod
    def from_error(cls, exc: GatewayError) -> "GatewayResponse":
        return cls(status_code=exc.status_code, body=exc.to_body())


# ── Gateway ───────────────────────────────────────────────────────────────────

class ProxyGateway:
    """Stateless request translator between callers and the CMS API.

    Args:
        config: Server-held credential and collection settings.
        session_manager: Pooled HTTP session; a fresh one is created when omitted.
    """

    def __init__(self, config: GatewayConfig,
                 session_manager: SessionManager | None = None) -> None:
        self.config = config
        self.session_manager = session_manager or SessionManager()

    def handle(self, method: str, query: Mapping[str, str]) -> GatewayResponse:
        """Handle one inbound request and return the response to send back."""
        method = method.upper()
        if method == "OPTIONS":
            return GatewayResponse(status_code=200)

        try:
            if method != "GET":
                raise MethodNotAllowedError(method)
            collection_id = self._resolve_collection(query)
            return self._forward(collection_id, query)
        except GatewayError as exc:
            return GatewayResponse.from_error(exc)

    def build_url(self, collection_id: str, query: Mapping[str, str]) -> str:
        """Return the upstream URL for *collection_id* and the caller's query."""
        base = f"{self.config.api_base}/collections/{quote(collection_id, safe='')}/items"
        item_id = query.get("itemId")
        if item_id:
            return f"{base}/{quote(item_id, safe='')}"
        # Defaults apply only when a parameter is absent; values are percent-encoded.
        offset = quote(query.get("offset", "0"), safe="")
        limit = quote(query.get("limit", "100"), safe="")
        return f"{base}?offset={offset}&limit={limit}"

    def _resolve_collection(self, query: Mapping[str, str]) -> str:
        if not self.config.api_token:
            logger.error("WEBFLOW_API_TOKEN environment variable is not set")
            raise ConfigurationError("API token not configured.")
        collection_id = query.get("collectionId") or self.config.collection_id
        if not collection_id:
            logger.error("LOCATION_COLLECTION_ID environment variable is not set")
            raise ConfigurationError("Collection ID not configured.")
        return collection_id

    def _forward(self, collection_id: str, query: Mapping[str, str]) -> GatewayResponse:
        url = self.build_url(collection_id, query)
        headers = {
            "Authorization": f"Bearer {self.config.api_token}",
            "accept-version": self.config.api_version,
        }
        try:
            resp = self.session_manager.session.get(
                url, headers=headers, timeout=self.config.timeout
            )
            if not resp.ok:
                logger.error("Webflow API error url=%s status=%d body=%s",
                             url, resp.status_code, resp.text)
                raise UpstreamError(resp.status_code, resp.reason or "", resp.text)
            data = resp.json()
        except GatewayError:
            raise
        except (requests.RequestException, ValueError) as exc:
            logger.exception("Upstream request failed url=%s", url)
            raise InternalError(exc, include_stack=self.config.debug) from exc

        item_id = query.get("itemId")
        if item_id:
            logger.info("Fetched url=%s item=%s collection=%s",
                        url, item_id, collection_id)
        else:
            items = data.get("items") if isinstance(data, dict) else None
            logger.info("Fetched url=%s items=%d collection=%s",
                        url, len(items or []), collection_id)
        return GatewayResponse(status_code=200, body=data)
