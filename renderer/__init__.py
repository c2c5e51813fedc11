"""Locations page renderer: paginated aggregation, reference resolution and HTML output."""

from renderer.client import FetchError, LocationsClient
from renderer.models import Item, Page, RenderedRecord, StatusDescriptor
from renderer.pipeline import collect_all, get_status_info, resolve_references
from renderer.render import LocationsPage, render_location_item, render_locations

__all__ = [
    "FetchError",
    "LocationsClient",
    "Item",
    "Page",
    "RenderedRecord",
    "StatusDescriptor",
    "collect_all",
    "get_status_info",
    "resolve_references",
    "LocationsPage",
    "render_location_item",
    "render_locations",
]
