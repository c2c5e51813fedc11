"""
Frontend HTML routes.

Routes:
    GET /locations   → server-rendered locations directory

The page runs the renderer pipeline in-process: its HTTP client talks to this
same application through an ASGI transport, so the page reads locations
through the proxy exactly as a browser would.
"""

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from renderer.client import LocationsClient
from renderer.render import LocationsPage
from utils.config import RendererConfig

router = APIRouter(tags=["frontend"])

_INTERNAL_BASE_URL = "http://locations-proxy"


def _renderer_config(request: Request) -> RendererConfig:
    return request.app.state.renderer_config


@router.get("/locations", response_class=HTMLResponse, include_in_schema=False)
async def locations_page(request: Request) -> HTMLResponse:
    """Render the locations directory page."""
    transport = httpx.ASGITransport(app=request.app)
    async with httpx.AsyncClient(transport=transport, base_url=_INTERNAL_BASE_URL) as http:
        page = LocationsPage(
            LocationsClient("/api/locations", http_client=http),
            _renderer_config(request),
        )
        await page.init()
    status = 502 if page.error_visible else 200
    return HTMLResponse(page.to_html(), status_code=status)
