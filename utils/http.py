"""HTTP session utilities for the locations proxy.

Provides a pooled requests session for upstream CMS calls.  Upstream requests
are never retried: the adapter is mounted with retries disabled so a failed
call surfaces to the caller exactly once.
"""

from typing import Optional

import requests
from requests.adapters import HTTPAdapter


class SessionManager:
    """Manages an HTTP session with connection pooling and no retries."""

    def __init__(self, pool_connections: int = 10, pool_maxsize: int = 20):
        """Initialize session manager.

        Args:
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum number of connections per pool
        """
        self.pool_connections = pool_connections
        self.pool_maxsize = pool_maxsize
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or create the pooled HTTP session.

        Returns:
            requests.Session object
        """
        if self._session is None:
            self._session = requests.Session()

            adapter = HTTPAdapter(
                max_retries=0,
                pool_connections=self.pool_connections,
                pool_maxsize=self.pool_maxsize
            )
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)

        return self._session

    def close(self) -> None:
        """Close the session and release resources."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
