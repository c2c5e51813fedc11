#!/usr/bin/env python3
"""
Render the locations page from a running proxy.

Usage:
    python render_locations.py                               # stdout
    python render_locations.py --output locations.html
    python render_locations.py --api-url https://example.com/api/locations \\
        --state-collection 6839e701b39a27ad1010cd7c

Exits with status 1 when the collection could not be loaded; the page is
still written so the error region can be inspected.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from renderer.client import LocationsClient
from renderer.render import LocationsPage
from utils.config import RendererConfig


async def render(config: RendererConfig) -> LocationsPage:
    async with LocationsClient(config.api_url) as client:
        page = LocationsPage(client, config)
        await page.init()
    return page


def main(argv: list[str] | None = None) -> int:
    config = RendererConfig.from_env()
    parser = argparse.ArgumentParser(
        description="Fetch all locations through the proxy and render them as HTML.",
    )
    parser.add_argument(
        "--api-url", default=config.api_url,
        help=f"Proxy endpoint (default: {config.api_url} or LOCATIONS_API_URL env var)",
    )
    parser.add_argument(
        "--state-collection", default=config.state_collection_id,
        help="State collection id (default: STATE_COLLECTION_ID env var)",
    )
    parser.add_argument(
        "--base-path", default=config.base_path,
        help="Link prefix for location pages (default: /locations)",
    )
    parser.add_argument(
        "--output", "-o", type=Path, default=None,
        help="Write HTML here instead of stdout",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s %(message)s")

    config.api_url = args.api_url
    config.state_collection_id = args.state_collection or None
    config.base_path = args.base_path.rstrip("/")

    page = asyncio.run(render(config))
    html = page.to_html()
    if args.output:
        args.output.write_text(html, encoding="utf-8")
        print(f"Wrote {len(page.items)} location(s) to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(html)
    return 1 if page.error_visible else 0


if __name__ == "__main__":
    sys.exit(main())
