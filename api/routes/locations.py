"""
Locations proxy endpoint.

GET     /api/locations   → relay a collection page or single item from the CMS
OPTIONS /api/locations   → CORS preflight
any other verb           → 405

Query parameters: collectionId, itemId, offset (default "0"),
limit (default "100").  All are forwarded as strings without validation.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from api.gateway import GatewayResponse, ProxyGateway
from api.models import ErrorOut

router = APIRouter(tags=["locations"])

_METHODS = ["GET", "OPTIONS", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def get_gateway(request: Request) -> ProxyGateway:
    return request.app.state.gateway


def to_response(result: GatewayResponse) -> Response:
    """Convert a GatewayResponse into a Starlette response."""
    if result.body is None:
        return Response(status_code=result.status_code, headers=result.headers)
    return JSONResponse(
        content=result.body, status_code=result.status_code, headers=result.headers
    )


@router.api_route(
    "/locations",
    methods=_METHODS,
    summary="Proxy a CMS collection page or item",
    responses={
        405: {"model": ErrorOut},
        500: {"model": ErrorOut},
    },
)
def proxy_locations(
    request: Request,
    gateway: ProxyGateway = Depends(get_gateway),
) -> Response:
    """Forward the request to the CMS API with the server-held token.

    The upstream JSON body is returned unchanged on success.  Upstream
    failures keep the upstream status code and include its raw body as
    ``details``.
    """
    result = gateway.handle(request.method, request.query_params)
    return to_response(result)
