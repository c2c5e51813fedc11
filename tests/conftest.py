"""
Pytest fixtures for the locations proxy tests.

Provides:
- gateway_config: a GatewayConfig with fake credentials (no env leakage)
- make_upstream_response: builds requests-like response mocks
- mock_session_manager: SessionManager whose session is a MagicMock
- make_items: deterministic CMS location items
- fake_proxy: an httpx.MockTransport that serves pages and state items the
  way the proxy does, recording every request it receives
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.config import GatewayConfig, RendererConfig  # noqa: E402
from utils.http import SessionManager  # noqa: E402

_ENV_VARS = (
    "WEBFLOW_API_TOKEN", "LOCATION_COLLECTION_ID", "WEBFLOW_API_BASE",
    "WEBFLOW_API_VERSION", "UPSTREAM_TIMEOUT", "APP_ENV",
    "LOCATIONS_API_URL", "STATE_COLLECTION_ID", "LOCATIONS_BASE_PATH",
)

PROXY_URL = "http://proxy.test/api/locations"
STATE_COLLECTION = "state-collection"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep host environment variables out of every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def gateway_config():
    return GatewayConfig.from_dict({
        "api_token": "test-token",
        "collection_id": "locations-collection",
        "api_base": "https://cms.test/v2",
    })


@pytest.fixture()
def renderer_config():
    return RendererConfig.from_dict({
        "api_url": PROXY_URL,
        "state_collection_id": STATE_COLLECTION,
        "base_path": "/locations",
    })


def _response(status=200, body=None, reason="OK", text=None, json_error=None):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.reason = reason
    resp.text = text if text is not None else json.dumps(body)
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture()
def make_upstream_response():
    return _response


@pytest.fixture()
def mock_session_manager():
    sm = SessionManager()
    sm._session = MagicMock()
    return sm


def _items(names, start=0, states=None, statuses=None, slugs=True):
    out = []
    for i, name in enumerate(names, start=start):
        field_data = {}
        if name is not None:
            field_data["name"] = name
        if slugs:
            field_data["slug"] = f"loc-{i}"
        if states is not None:
            field_data["state"] = states[(i - start) % len(states)]
        if statuses is not None:
            field_data["location-status"] = statuses[(i - start) % len(statuses)]
        out.append({"id": f"item-{i}", "fieldData": field_data})
    return out


@pytest.fixture()
def make_items():
    return _items


class FakeProxy:
    """Serves a fixed item list through proxy-shaped query parameters."""

    def __init__(self, items, states=None, page_status=200, error_body=None,
                 failing_states=()):
        self.items = items
        self.states = states or {}
        self.page_status = page_status
        self.error_body = error_body
        self.failing_states = set(failing_states)
        self.page_requests: list[tuple[int, int]] = []
        self.item_requests: list[tuple[str, str]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        if "itemId" in params:
            key = (params["collectionId"], params["itemId"])
            self.item_requests.append(key)
            if params["itemId"] in self.failing_states:
                raise httpx.ConnectError("connection refused", request=request)
            state = self.states.get(params["itemId"])
            if state is None:
                return httpx.Response(404, json={"error": "Webflow API error: 404 Not Found"})
            return httpx.Response(200, json=state)

        offset, limit = int(params["offset"]), int(params["limit"])
        self.page_requests.append((offset, limit))
        if self.page_status != 200:
            return httpx.Response(self.page_status, json=self.error_body or {})
        return httpx.Response(200, json={
            "items": self.items[offset:offset + limit],
            "pagination": {"offset": offset, "limit": limit, "total": len(self.items)},
        })

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture()
def fake_proxy():
    return FakeProxy
