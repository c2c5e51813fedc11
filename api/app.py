"""
FastAPI application factory.

Usage:
    python -m api.app                    # Dev server on port 8000
    WEBFLOW_API_TOKEN=... LOCATION_COLLECTION_ID=... python -m api.app

OpenAPI docs available at http://localhost:8000/docs after starting.

Routes:
    GET|OPTIONS /api/locations   → Webflow CMS proxy (api.routes.locations)
    GET /locations               → rendered locations page (api.routes.frontend)
    GET /health                  → liveness + configuration status

CORS headers are set by the gateway itself on every response, including
errors, so no CORS middleware is installed.
"""

import json
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.gateway import CORS_HEADERS, ProxyGateway
from api.models import HealthOut
from api.routes import frontend as frontend_routes
from api.routes import locations
from utils.config import AppConfig, GatewayConfig, RendererConfig
from utils.http import SessionManager

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

# ── Structured JSON logging ───────────────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("method", "path", "status", "duration_ms", "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


def configure_logging(log_format: str = "text") -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
    logging.basicConfig(handlers=[handler], level=logging.INFO, force=True)


_logger = logging.getLogger("locations_proxy")
configure_logging(_cfg.log_format)


def create_app(
    gateway_config: GatewayConfig | None = None,
    renderer_config: RendererConfig | None = None,
    session_manager: SessionManager | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        gateway_config: Override the env-derived gateway settings (tests).
        renderer_config: Override the env-derived renderer settings (tests).
        session_manager: Upstream HTTP session to use; created when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    gateway_config = gateway_config or GatewayConfig.from_env()
    renderer_config = renderer_config or RendererConfig.from_env()

    app = FastAPI(
        title="Locations Proxy",
        summary="Read-only proxy for the Webflow CMS locations collection.",
        description=(
            "Forwards GET requests to the Webflow CMS API v2 with a server-held "
            "token so browser clients never see it.\n\n"
            "- `GET /api/locations?offset=0&limit=100` returns a collection page.\n"
            "- `GET /api/locations?collectionId=...&itemId=...` returns one item.\n\n"
            "Successful upstream payloads are relayed unchanged."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "locations", "description": "CMS proxy endpoint."},
            {"name": "meta", "description": "Health check."},
        ],
    )
    app.state.gateway = ProxyGateway(gateway_config, session_manager)
    app.state.renderer_config = renderer_config

    # ── Request logging middleware ────────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request with its status and duration."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        if _cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f rid=%s",
                request.method, request.url.path, response.status_code,
                duration_ms, request_id,
            )
        return response

    # ── Error handling ────────────────────────────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return the JSON error envelope."""
        _logger.error("Unhandled error on %s: %s", request.url.path, exc,
                      exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc)},
            headers=CORS_HEADERS,
        )

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check", response_model=HealthOut)
    def health():
        """Return 200 with configuration status; 503 when the token is missing."""
        body = {
            "status": "ok" if gateway_config.api_token else "misconfigured",
            "token_configured": bool(gateway_config.api_token),
            "collection_configured": bool(gateway_config.collection_id),
        }
        if not gateway_config.api_token:
            return JSONResponse(status_code=503, content=body)
        return body

    # ── Register routers ──────────────────────────────────────────────────────

    app.include_router(locations.router, prefix="/api")
    app.include_router(frontend_routes.router)

    return app


# Singleton instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.app:app",
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
