"""
catalog.schemas - Pydantic models for the static catalog files.

    data/items.json             {"items": [ItemRecord, ...]}
    data/affixes/<slug>.json    {"affixes": [affix, ...]}

The envelopes are validated strictly; individual affix entries are left
as raw dicts and parsed tolerantly by ``AffixDefinition.from_dict``.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from pickit.models import SelectedItem


class ItemRecord(BaseModel):
    """One item type from items.json."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    slug: str = Field(..., min_length=1, description="File name stem of the item's affix file")
    label: str = Field(default="", description="Display name")
    category: str = Field(default="", description="Catalog grouping, e.g. 'Jewellery'")
    pickit_category: Optional[str] = Field(
        default=None,
        alias="pickitCategory",
        description="Category name used in rule lines, e.g. 'Ring'",
    )

    def to_selected_item(self) -> SelectedItem:
        return SelectedItem(
            slug=self.slug,
            label=self.label or self.slug,
            category=self.category,
            pickit_category=self.pickit_category,
        )


class ItemsFile(BaseModel):
    """Envelope of items.json. Entries are validated one by one."""

    model_config = ConfigDict(extra="ignore")

    items: List[Any] = Field(default_factory=list)


class AffixFile(BaseModel):
    """Envelope of affixes/<slug>.json."""

    model_config = ConfigDict(extra="ignore")

    affixes: List[Any]
