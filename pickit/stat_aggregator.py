"""
Stat aggregation across affix slots.

Walks slots in order and collects the stat ranges of each slot's chosen
tier. Keeps two views apart:

- ``ordered_per_slot``: stat ids per slot in appearance order, one entry
  per slot (empty when the slot has no affix+tier)
- ``totals``: min/max summed per stat id over the whole collection

so rule lines can list conditions in a stable order while reporting the
combined bounds.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from pickit.models import AffixDefinition, AffixSlot, is_finite_number

logger = logging.getLogger(__name__)

FindAffix = Callable[[Optional[str]], Optional[AffixDefinition]]
TiersFor = Callable[[int], Optional[Iterable[Any]]]


@dataclass
class StatTotal:
    """Summed bounds of one stat id."""
    min: float = 0
    max: float = 0


@dataclass
class StatAggregation:
    """Result of aggregate_stats."""
    ordered_per_slot: List[List[str]] = field(default_factory=list)
    totals: Dict[str, StatTotal] = field(default_factory=dict)

    def first_appearance_order(self) -> List[str]:
        """Stat ids in slot order, each listed once."""
        seen: Dict[str, None] = {}
        for slot_ids in self.ordered_per_slot:
            for stat_id in slot_ids:
                seen.setdefault(stat_id, None)
        return list(seen)


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, dict):
        return entry.get(name)
    return getattr(entry, name, None)


def _chosen_tier(
    slot: AffixSlot,
    index: int,
    find_affix: FindAffix,
    tiers_for: TiersFor,
) -> Optional[Any]:
    key = getattr(slot, "selected_affix_key", None)
    level = getattr(slot, "selected_tier_level", None)
    if not key or level is None:
        return None
    if find_affix(key) is None:
        return None

    tiers = tiers_for(index) or []
    for tier in tiers:
        if _field(tier, "level") == level:
            return tier
    return None


def aggregate_stats(
    slots: Sequence[AffixSlot],
    find_affix: FindAffix,
    tiers_for: TiersFor,
) -> StatAggregation:
    """
    Aggregate the stats of every slot's chosen tier.

    Args:
        slots: Slots in collection order.
        find_affix: Resolves an affix key to its definition.
        tiers_for: Returns the tier list for a slot index.

    Returns:
        StatAggregation. Malformed stat entries are skipped.
    """
    result = StatAggregation()

    for index, slot in enumerate(slots or []):
        slot_ids: List[str] = []
        result.ordered_per_slot.append(slot_ids)

        tier = _chosen_tier(slot, index, find_affix, tiers_for)
        if tier is None:
            continue

        stats = _field(tier, "stats")
        if not isinstance(stats, (list, tuple)):
            continue

        for stat in stats:
            stat_id = _field(stat, "id")
            low = _field(stat, "min")
            high = _field(stat, "max")
            if not isinstance(stat_id, str) or not stat_id:
                continue
            if not is_finite_number(low) or not is_finite_number(high):
                continue

            slot_ids.append(stat_id)
            total = result.totals.setdefault(stat_id, StatTotal())
            total.min += low
            total.max += high

    logger.debug(
        "Aggregated %d stat ids across %d slots",
        len(result.totals),
        len(result.ordered_per_slot),
    )
    return result
