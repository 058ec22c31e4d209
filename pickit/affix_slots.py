"""
Affix Slot Manager

Manages the ordered affix slots of one rule row:

- Up to N slots (default 6), never fewer than one
- Uniqueness: a slot cannot pick what an *earlier* slot already picked
  (slot 1 blocks slots 2..N, slot 2 blocks 3..N, ...). Changing an earlier
  slot frees its old choice for later slots.
- Caps: at most 3 prefixes and 3 suffixes overall (configurable)
- Per-slot grouped option lists for prefix / suffix / other pickers
- "Add affix" enablement and the reason it is disabled
- Changing a slot's affix always clears that slot's tier

Everything derived (options, counts, enablement) is recomputed on each
call; nothing is cached between mutations.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from pickit.affix_identity import affix_key, find_affix_by_key
from pickit.constants import (
    DEFAULT_MAX_PREFIXES,
    DEFAULT_MAX_SLOTS,
    DEFAULT_MAX_SUFFIXES,
    GROUP_LABEL_OTHER,
    GROUP_LABEL_PREFIXES,
    GROUP_LABEL_SUFFIXES,
    KIND_PREFIX,
    KIND_SUFFIX,
)
from pickit.models import AffixDefinition, AffixSlot, Tier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotLimits:
    """Slot caps for one rule row."""
    max_slots: int = DEFAULT_MAX_SLOTS
    max_prefixes: int = DEFAULT_MAX_PREFIXES
    max_suffixes: int = DEFAULT_MAX_SUFFIXES


@dataclass(frozen=True)
class KindCounts:
    """Number of selected prefixes and suffixes."""
    prefixes: int = 0
    suffixes: int = 0


@dataclass
class OptionGroup:
    """One labelled bucket of selectable affixes."""
    label: str
    items: List[AffixDefinition] = field(default_factory=list)


def _template_sort_key(affix: AffixDefinition):
    # Case-insensitive first; on ties lowercase sorts before uppercase.
    template = affix.template
    return (template.casefold(), template.swapcase())


class AffixSlotManager:
    """
    Owns the slot collection of one rule row.

    The catalog passed in is the list of *available* affixes for the
    selected item, already filtered by the catalog layer.
    """

    def __init__(
        self,
        affixes: Optional[Iterable[AffixDefinition]] = None,
        limits: Optional[SlotLimits] = None,
    ) -> None:
        self.limits = limits or SlotLimits()
        self._affixes: List[AffixDefinition] = list(affixes or [])
        self._slots: List[AffixSlot] = [AffixSlot()]

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def slots(self) -> List[AffixSlot]:
        """Slots in order. Mutate only through the manager's methods."""
        return self._slots

    @property
    def affixes(self) -> List[AffixDefinition]:
        return self._affixes

    def set_catalog(self, affixes: Optional[Iterable[AffixDefinition]]) -> None:
        """Install a new catalog. Choices made against the old one are dropped."""
        self._affixes = list(affixes or [])
        self.reset_all()

    def find_affix(self, key: Optional[str]) -> Optional[AffixDefinition]:
        return find_affix_by_key(self._affixes, key)

    def _slot_at(self, index: int) -> Optional[AffixSlot]:
        if 0 <= index < len(self._slots):
            return self._slots[index]
        return None

    def _kind_of_key(self, key: Optional[str]) -> str:
        affix = self.find_affix(key)
        return affix.kind if affix is not None else ""

    # ------------------------------------------------------------------
    # Slot add / remove / reset
    # ------------------------------------------------------------------

    def reset_all(self) -> None:
        """Collapse back to exactly one empty slot."""
        self._slots = [AffixSlot()]

    def add_slot(self) -> bool:
        """Append an empty slot if allowed. Returns True if a slot was added."""
        if not self.can_add_slot:
            logger.debug("add_slot rejected: %s", self.add_blocked_reason)
            return False
        self._slots.append(AffixSlot())
        return True

    def remove_slot(self, index: int) -> bool:
        """Remove the slot at ``index``. At least one slot always remains."""
        if len(self._slots) <= 1 or self._slot_at(index) is None:
            return False
        del self._slots[index]
        return True

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_affix(self, index: int, key: Optional[str]) -> bool:
        """
        Set the affix of slot ``index``.

        ``key`` must be None (clear) or one of ``options_for(index)``.
        Whenever the key changes the slot's tier is cleared in the same
        update.

        Returns:
            True if the selection was applied.
        """
        slot = self._slot_at(index)
        if slot is None:
            return False

        key = key or None
        if key is not None and key not in self.option_keys_for(index):
            logger.debug("select_affix rejected for slot %d: %r not selectable", index, key)
            return False

        if key != slot.selected_affix_key:
            slot.selected_affix_key = key
            slot.selected_tier_level = None
        return True

    def select_tier(self, index: int, level: Optional[int]) -> bool:
        """Set the tier of slot ``index``; the selected affix must have it."""
        slot = self._slot_at(index)
        if slot is None:
            return False

        if level is None:
            slot.selected_tier_level = None
            return True

        affix = self.find_affix(slot.selected_affix_key)
        if affix is None or affix.tier_for_level(level) is None:
            logger.debug("select_tier rejected for slot %d: level %r", index, level)
            return False

        slot.selected_tier_level = level
        return True

    def selected_affix(self, index: int) -> Optional[AffixDefinition]:
        slot = self._slot_at(index)
        return self.find_affix(slot.selected_affix_key) if slot else None

    def selected_tier(self, index: int) -> Optional[Tier]:
        slot = self._slot_at(index)
        affix = self.selected_affix(index)
        if slot is None or affix is None:
            return None
        return affix.tier_for_level(slot.selected_tier_level)

    def available_tiers(self, index: int) -> List[Tier]:
        """Tiers of the slot's selected affix (empty if none)."""
        affix = self.selected_affix(index)
        return list(affix.tiers) if affix is not None else []

    # ------------------------------------------------------------------
    # Counting
    # ------------------------------------------------------------------

    def count_by_kind(self, except_index: Optional[int] = None) -> KindCounts:
        """
        Count selected prefixes and suffixes.

        ``except_index`` skips one slot so the slot being edited can keep
        showing its own selection while the cap is otherwise reached.
        """
        prefixes = 0
        suffixes = 0
        for i, slot in enumerate(self._slots):
            if except_index is not None and i == except_index:
                continue
            if not slot.selected_affix_key:
                continue
            kind = self._kind_of_key(slot.selected_affix_key)
            if kind == KIND_PREFIX:
                prefixes += 1
            elif kind == KIND_SUFFIX:
                suffixes += 1
        return KindCounts(prefixes=prefixes, suffixes=suffixes)

    @property
    def prefix_count(self) -> int:
        return self.count_by_kind().prefixes

    @property
    def suffix_count(self) -> int:
        return self.count_by_kind().suffixes

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def _excluded_keys_for(self, index: int) -> Set[str]:
        excluded = set()
        for i in range(min(index, len(self._slots))):
            key = self._slots[i].selected_affix_key
            if key:
                excluded.add(key)
        return excluded

    def options_for(self, index: int) -> List[OptionGroup]:
        """
        Grouped options for slot ``index``.

        ``index`` may equal ``len(slots)`` to ask what a new slot would
        offer.
        """
        excluded = self._excluded_keys_for(index)
        counts = self.count_by_kind(except_index=index)
        current = self._slot_at(index)
        current_key = current.selected_affix_key if current else None

        prefixes_open = counts.prefixes < self.limits.max_prefixes
        suffixes_open = counts.suffixes < self.limits.max_suffixes

        prefixes: List[AffixDefinition] = []
        suffixes: List[AffixDefinition] = []
        other: List[AffixDefinition] = []

        for affix in self._affixes:
            key = affix_key(affix)
            is_current = current_key is not None and key == current_key

            if not is_current:
                if key in excluded:
                    continue
                if affix.kind == KIND_PREFIX and not prefixes_open:
                    continue
                if affix.kind == KIND_SUFFIX and not suffixes_open:
                    continue

            if affix.kind == KIND_PREFIX:
                prefixes.append(affix)
            elif affix.kind == KIND_SUFFIX:
                suffixes.append(affix)
            else:
                other.append(affix)

        groups = []
        for label, items in (
            (GROUP_LABEL_PREFIXES, prefixes),
            (GROUP_LABEL_SUFFIXES, suffixes),
            (GROUP_LABEL_OTHER, other),
        ):
            if items:
                groups.append(OptionGroup(label=label, items=sorted(items, key=_template_sort_key)))
        return groups

    def option_keys_for(self, index: int) -> Set[str]:
        return {affix_key(affix) for group in self.options_for(index) for affix in group.items}

    # ------------------------------------------------------------------
    # "Add affix" signals
    # ------------------------------------------------------------------

    @property
    def can_add_slot(self) -> bool:
        if len(self._slots) >= self.limits.max_slots:
            return False
        if not self._affixes:
            return False
        return any(group.items for group in self.options_for(len(self._slots)))

    @property
    def add_blocked_reason(self) -> str:
        """Why "Add affix" is disabled; empty while adding is possible."""
        if self.can_add_slot:
            return ""
        if len(self._slots) >= self.limits.max_slots:
            return f"Max {self.limits.max_slots} affixes."
        if not self._affixes:
            return "No affixes available."
        counts = self.count_by_kind()
        if counts.prefixes >= self.limits.max_prefixes and counts.suffixes >= self.limits.max_suffixes:
            return (
                f"Prefix/Suffix caps reached "
                f"({self.limits.max_prefixes}/{self.limits.max_suffixes})."
            )
        return "No valid affixes left to add."
