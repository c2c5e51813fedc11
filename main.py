#!/usr/bin/env python3
"""
Locations Proxy: launch the API server.

Usage:
    python main.py                          # http://localhost:8000
    python main.py --port 9000              # http://localhost:9000
    python main.py --host 127.0.0.1         # bind to localhost only
    python main.py --reload                 # auto-reload on code changes

Requires WEBFLOW_API_TOKEN and LOCATION_COLLECTION_ID in the environment.
"""

from __future__ import annotations

import argparse
import os
import sys


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Launch the Webflow locations proxy.",
    )
    parser.add_argument(
        "--host", default=os.getenv("APP_HOST", "0.0.0.0"),
        help="Bind address (default: 0.0.0.0 or APP_HOST env var)",
    )
    parser.add_argument(
        "--port", type=int, default=int(os.getenv("APP_PORT", "8000")),
        help="Port to listen on (default: 8000 or APP_PORT env var)",
    )
    parser.add_argument(
        "--reload", action="store_true",
        help="Enable auto-reload on file changes (development mode)",
    )
    args = parser.parse_args()

    if not os.getenv("WEBFLOW_API_TOKEN"):
        print("Warning: WEBFLOW_API_TOKEN is not set; every proxy request will fail with 500.")
    if not os.getenv("LOCATION_COLLECTION_ID"):
        print("Warning: LOCATION_COLLECTION_ID is not set; callers must pass collectionId.")

    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn is not installed.")
        print("  pip install uvicorn[standard]")
        sys.exit(1)

    url = f"http://{'localhost' if args.host == '0.0.0.0' else args.host}:{args.port}"
    print(f"Starting locations proxy at {url}")
    print(f"  Proxy endpoint: {url}/api/locations")
    print(f"  Locations page: {url}/locations")
    print()

    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
