"""
Rule row session.

Glues one rule row together: the chosen item type, its affix catalog, the
slot manager and the compiled output. Choosing a different item always
starts over with a single empty slot, since affix choices made for one
item mean nothing for another.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from catalog.affix_filters import visible_affixes
from catalog.catalog_store import CatalogStore
from pickit.affix_slots import AffixSlotManager
from pickit.config import Config
from pickit.models import SelectedItem
from pickit.preview import generate_preview_lines
from pickit.rule_compiler import RuleContext, compile_rule_lines

logger = logging.getLogger(__name__)


class RuleRowSession:
    """One row of the configurator."""

    def __init__(self, store: CatalogStore, config: Optional[Config] = None) -> None:
        self.store = store
        self.config = config or Config()
        self.slots = AffixSlotManager(limits=self.config.slot_limits())

        self.item_slug: str = ""
        self.item: Optional[SelectedItem] = None
        self.load_error: str = ""

        self.config_type: str = self.config.config_type
        self.action_flag: str = self.config.default_action_flag

    def select_item(self, slug: Optional[str]) -> bool:
        """
        Switch the row to another item type and reset its slots.

        Returns:
            True if the item and its affixes were loaded.
        """
        self.item_slug = slug or ""
        self.item = self.store.find_item(slug)
        self.load_error = ""

        if not self.item_slug:
            self.slots.set_catalog([])
            return False

        if self.item is None:
            self.load_error = f"Unknown item: {self.item_slug}"
            logger.warning(self.load_error)
            self.slots.set_catalog([])
            return False

        result = self.store.get_affixes_for_slug(self.item_slug)
        if result.is_err():
            self.load_error = result.error
            self.slots.set_catalog([])
            return False

        self.slots.set_catalog(visible_affixes(result.unwrap()))
        logger.info(
            "Row switched to %s (%d selectable affixes)",
            self.item_slug,
            len(self.slots.affixes),
        )
        return True

    def rule_context(self) -> RuleContext:
        return RuleContext(
            config_type=self.config_type,
            pickit_category=self.item.pickit_category if self.item else None,
            slots=self.slots.slots,
            find_affix=self.slots.find_affix,
            tiers_for=self.slots.available_tiers,
            action_flag=self.action_flag,
            allowed_action_flags=self.config.action_flags,
            default_action_flag=self.config.default_action_flag,
        )

    def compile(self) -> List[str]:
        """Current rule lines, rebuilt from scratch."""
        return compile_rule_lines(self.rule_context())

    def preview_lines(self) -> List[str]:
        return generate_preview_lines(
            self.item_slug,
            self.item,
            self.slots.slots,
            self.slots.find_affix,
            self.slots.available_tiers,
        )
