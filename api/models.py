"""
Pydantic response models for the API.

Successful gateway responses are relayed from the CMS verbatim, so only the
error envelope and the health payload are modelled here.  They feed the
OpenAPI docs; route handlers build their JSON directly.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorOut(BaseModel):
    """Error envelope returned by the proxy on every failure path."""
    error: str = Field(..., description="Human-readable error summary",
                       examples=["Server configuration error. API token not configured."])
    details: str | None = Field(None, description="Raw upstream error body (upstream failures only)",
                                examples=['{"message":"Resource not found"}'])
    message: str | None = Field(None, description="Underlying failure description (internal errors only)")
    stack: str | None = Field(None, description="Stack trace, development mode only")


class HealthOut(BaseModel):
    """Liveness and configuration status."""
    status: str = Field(..., description="ok | misconfigured", examples=["ok"])
    token_configured: bool = Field(..., description="Whether WEBFLOW_API_TOKEN is set")
    collection_configured: bool = Field(..., description="Whether LOCATION_COLLECTION_ID is set")
