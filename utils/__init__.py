"""Shared utilities for the locations proxy and renderer."""

# Configuration
from utils.config import (
    Config,
    GatewayConfig,
    RendererConfig,
    AppConfig,
)

# HTTP utilities
from utils.http import SessionManager

# Reference cache
from utils.cache import ReferenceCache

__all__ = [
    # Config
    "Config",
    "GatewayConfig",
    "RendererConfig",
    "AppConfig",
    # HTTP
    "SessionManager",
    # Cache
    "ReferenceCache",
]
