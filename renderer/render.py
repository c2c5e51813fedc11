"""
HTML rendering for the locations page.

Templates live in ``renderer/templates/locations/`` and are rendered with Jinja2
autoescaping, so every CMS-supplied value (name, state, status text, slug,
id) is HTML-escaped before it reaches the page.

LocationsPage models the host document's three regions (loading indicator,
error message, collection container) and drives the load flow::

    page = LocationsPage(client, config)
    await page.init()
    html = page.to_html()
"""

from __future__ import annotations

import logging

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from renderer.client import LocationsClient
from renderer.models import Item, RenderedRecord
from renderer.pipeline import collect_all, resolve_references
from utils.cache import ReferenceCache
from utils.config import RendererConfig

logger = logging.getLogger(__name__)

UNNAMED_LOCATION = "Unnamed Location"
EMPTY_PLACEHOLDER = Markup(
    '<p style="grid-column: 1 / -1; text-align: center;">No locations found.</p>'
)

_env = Environment(
    loader=PackageLoader("renderer", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_location_item(record: RenderedRecord, base_path: str = "/locations") -> str:
    """Render one location link block."""
    href = f"{base_path}/{record.slug}" if record.slug else "#"
    return _env.get_template("locations/item.html").render(
        record=record,
        name=record.name or UNNAMED_LOCATION,
        href=href,
    )


def render_locations(records: list[RenderedRecord], base_path: str = "/locations") -> Markup:
    """Render every record into a single container fragment."""
    return Markup("").join(
        Markup(render_location_item(r, base_path)) for r in records
    )


class LocationsPage:
    """The locations page: three regions plus the load flow that fills them."""

    def __init__(self, client: LocationsClient, config: RendererConfig | None = None) -> None:
        self.client = client
        self.config = config or RendererConfig.from_env()
        self.cache = ReferenceCache()
        self.loading_visible = True
        self.error_visible = False
        self.error_message = ""
        self.container_html = Markup("")
        self.items: list[Item] = []

    async def render_all(self, items: list[Item]) -> None:
        if not items:
            self.container_html = EMPTY_PLACEHOLDER
            return
        records = await resolve_references(
            items, self.client, self.cache, self.config.state_collection_id
        )
        self.container_html = render_locations(records, self.config.base_path)

    def show_error(self, message: str) -> None:
        self.error_message = message
        self.error_visible = True
        self.loading_visible = False

    async def init(self) -> None:
        """Collect, resolve and render all locations, or show the failure."""
        self.loading_visible = True
        try:
            self.items = await collect_all(
                self.client, self.config.page_limit, self.config.max_items
            )
            self.loading_visible = False
            await self.render_all(self.items)
            logger.info("Successfully loaded %d location(s)", len(self.items))
        except Exception as exc:
            logger.error("Initialization error: %s", exc)
            self.container_html = Markup("")
            self.show_error(f"Failed to load locations. {exc}")

    def to_html(self) -> str:
        """Render the full host document for the current region state."""
        return _env.get_template("locations/page.html").render(page=self)
