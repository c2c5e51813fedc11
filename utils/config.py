"""Configuration management for the locations proxy.

Provides:
- A base Config class with dict round-tripping for tests and diagnostics
- GatewayConfig: upstream credential and collection settings for the proxy
- RendererConfig: settings for the locations page pipeline
- AppConfig: HTTP server and logging settings

All settings are read from environment variables once, when the object is
created.  Nothing here is reloaded at runtime.
"""

import os as _os
from typing import Any, Dict, Optional


WEBFLOW_API_BASE = "https://api.webflow.com/v2"
WEBFLOW_API_VERSION = "1.0.0"

# Webflow caps collection pages at 100 items.
DEFAULT_PAGE_LIMIT = 100
MAX_COLLECTED_ITEMS = 1000


def _env(name: str) -> Optional[str]:
    """Return the env var value, treating empty strings as unset."""
    value = _os.getenv(name)
    return value or None


class Config:
    """Base configuration class for organizing application settings."""

    def __init__(self):
        """Initialize configuration with default values."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary.

        Returns:
            Dictionary of all config attributes
        """
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary.

        Values in *data* override whatever the environment provided.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance with values from dictionary
        """
        config = cls()
        for key, value in data.items():
            if not hasattr(config, key):
                raise ValueError(f"Unknown {cls.__name__} setting: {key}")
            setattr(config, key, value)
        return config


class GatewayConfig(Config):
    """Server-held settings for the proxy gateway.

    Environment variables:
        WEBFLOW_API_TOKEN: Bearer credential for the CMS API (required per request)
        LOCATION_COLLECTION_ID: Default collection when the caller sends none
        WEBFLOW_API_BASE: Upstream API base URL (default: https://api.webflow.com/v2)
        WEBFLOW_API_VERSION: Value of the accept-version header (default: 1.0.0)
        UPSTREAM_TIMEOUT: Optional upstream timeout in seconds (default: none)
        APP_ENV: "development" adds stack traces to internal error bodies
    """

    def __init__(self) -> None:
        super().__init__()
        self.api_token: Optional[str] = _env("WEBFLOW_API_TOKEN")
        self.collection_id: Optional[str] = _env("LOCATION_COLLECTION_ID")
        self.api_base: str = (_env("WEBFLOW_API_BASE") or WEBFLOW_API_BASE).rstrip("/")
        self.api_version: str = _env("WEBFLOW_API_VERSION") or WEBFLOW_API_VERSION
        raw_timeout = _env("UPSTREAM_TIMEOUT")
        self.timeout: Optional[float] = float(raw_timeout) if raw_timeout else None
        self.debug: bool = (_env("APP_ENV") or "").lower() == "development"

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        """Create a GatewayConfig instance populated from environment variables."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if data.get("api_token"):
            data["api_token"] = "***"
        return data


class RendererConfig(Config):
    """Settings for the locations page pipeline.

    Environment variables:
        LOCATIONS_API_URL: Proxy endpoint the pipeline reads from
        STATE_COLLECTION_ID: Collection holding state records; unset disables
            state abbreviation lookups
        LOCATIONS_BASE_PATH: Path prefix for location detail links
    """

    def __init__(self) -> None:
        super().__init__()
        self.api_url: str = (
            _env("LOCATIONS_API_URL") or "http://127.0.0.1:8000/api/locations"
        )
        self.state_collection_id: Optional[str] = _env("STATE_COLLECTION_ID")
        self.base_path: str = (_env("LOCATIONS_BASE_PATH") or "/locations").rstrip("/")
        self.page_limit: int = DEFAULT_PAGE_LIMIT
        self.max_items: int = MAX_COLLECTED_ITEMS

    @classmethod
    def from_env(cls) -> "RendererConfig":
        """Create a RendererConfig instance populated from environment variables."""
        return cls()


class AppConfig(Config):
    """Application-level configuration loaded from environment variables.

    Environment variables:
        APP_PORT: API server port (default: 8000)
        APP_HOST: API server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format, "text" or "json" (default: text)
    """

    def __init__(self) -> None:
        super().__init__()
        self.api_port = int(_os.getenv("APP_PORT", "8000"))
        self.api_host = _os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = _os.getenv("APP_LOG_FORMAT", "text")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()
