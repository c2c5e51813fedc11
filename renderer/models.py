"""
Data models for the locations renderer.

Items come from the CMS with no enforced schema.  Fields are read
defensively: anything absent, null or non-string reads as an empty string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """A CMS collection item: an opaque id plus free-form field data."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = ""
    field_data: dict[str, Any] = Field(default_factory=dict, alias="fieldData")

    @classmethod
    def from_raw(cls, raw: Any) -> "Item":
        """Build an Item from an upstream JSON object, tolerating junk."""
        if not isinstance(raw, dict):
            return cls()
        data = dict(raw)
        if not isinstance(data.get("fieldData"), dict):
            data["fieldData"] = {}
        if not isinstance(data.get("id"), str):
            data["id"] = "" if data.get("id") is None else str(data["id"])
        return cls.model_validate(data)

    def field(self, name: str) -> str:
        """Return the named field as a string, or ``""`` if absent."""
        value = self.field_data.get(name)
        return value if isinstance(value, str) else ""

    @property
    def name(self) -> str:
        return self.field("name")


@dataclass
class Page:
    """One page of a collection as returned through the proxy."""

    items: list[Item]
    raw: dict[str, Any]


@dataclass(frozen=True)
class StatusDescriptor:
    """Display text and CSS class for a location status."""

    text: str
    css_class: str


@dataclass
class RenderedRecord:
    """An item joined with its resolved reference data, ready to render."""

    item_id: str
    name: str
    slug: str
    state_abbr: str
    status: StatusDescriptor
