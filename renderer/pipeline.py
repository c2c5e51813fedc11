"""
Aggregation pipeline for the locations page.

collect_all() pages through the locations collection and sorts the result;
resolve_references() joins every item with its state abbreviation and
status descriptor.  State lookups for all items run concurrently and share a
per-render ReferenceCache.
"""

from __future__ import annotations

import asyncio
import logging

from pyuca import Collator

from renderer.client import LocationsClient
from renderer.models import Item, RenderedRecord, StatusDescriptor
from utils.cache import ReferenceCache
from utils.config import DEFAULT_PAGE_LIMIT, MAX_COLLECTED_ITEMS

logger = logging.getLogger(__name__)

DEFAULT_STATUS_CLASS = "text-color-secondary"

# Webflow option-field hashes for the location-status field.
STATUS_MAP: dict[str, StatusDescriptor] = {
    "623f78aa0b815e595a83562106dfe2d0": StatusDescriptor("We're Open", "text-color-secondary"),
    "7f99e27cfc0c3dc09883a32ceadb4acf": StatusDescriptor("Coming Soon", "text-green"),
}
UNKNOWN_STATUS = StatusDescriptor("Coming Soon", DEFAULT_STATUS_CLASS)
EMPTY_STATUS = StatusDescriptor("", DEFAULT_STATUS_CLASS)

# Checked in order; the first non-empty value wins.
STATE_ABBR_FIELDS = ("abbreviation", "abbr", "code", "name")


# DUCET ordering: accented letters sort beside their base letter.
_collator = Collator()


def sort_key(item: Item) -> tuple:
    return _collator.sort_key(item.name.casefold())


async def collect_all(
    client: LocationsClient,
    limit: int = DEFAULT_PAGE_LIMIT,
    max_items: int = MAX_COLLECTED_ITEMS,
) -> list[Item]:
    """Fetch every page of the collection and return items sorted by name.

    Stops on the first short page, or once *max_items* have been collected.

    Raises:
        FetchError: Any page request failed.
    """
    items: list[Item] = []
    offset = 0
    while True:
        page = await client.fetch_page(offset, limit)
        items.extend(page.items)
        offset += limit

        if len(items) >= max_items:
            logger.warning("Reached maximum item limit of %d", max_items)
            break
        if len(page.items) < limit:
            break

    items.sort(key=sort_key)
    return items


def get_status_info(status_hash: str | None) -> StatusDescriptor:
    """Map a location-status hash to its display descriptor.

    An empty or absent hash yields empty text; an unrecognised hash yields
    the default "Coming Soon" descriptor.
    """
    if not status_hash:
        return EMPTY_STATUS
    return STATUS_MAP.get(status_hash, UNKNOWN_STATUS)


def extract_abbreviation(state: Item | None) -> str:
    if state is None:
        return ""
    for name in STATE_ABBR_FIELDS:
        value = state.field(name)
        if value:
            return value
    return ""


async def get_state_abbreviation(
    state_id: str,
    client: LocationsClient,
    cache: ReferenceCache,
    state_collection_id: str | None,
) -> str:
    """Resolve a state reference id to its abbreviation, using *cache*."""
    if not state_id or not state_collection_id:
        return ""

    async def load(key: str) -> str:
        state = await client.fetch_item_by_id(state_collection_id, key)
        return extract_abbreviation(state)

    return await cache.get_or_populate(state_id, load)


async def resolve_references(
    items: list[Item],
    client: LocationsClient,
    cache: ReferenceCache,
    state_collection_id: str | None,
) -> list[RenderedRecord]:
    """Join each item with its reference data; output order matches *items*."""

    async def resolve(item: Item) -> RenderedRecord:
        state_abbr = await get_state_abbreviation(
            item.field("state"), client, cache, state_collection_id
        )
        return RenderedRecord(
            item_id=item.id,
            name=item.name,
            slug=item.field("slug"),
            state_abbr=state_abbr,
            status=get_status_info(item.field("location-status")),
        )

    return list(await asyncio.gather(*(resolve(item) for item in items)))
