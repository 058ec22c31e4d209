"""
Human-readable preview of a rule row.

One line per slot with a resolvable affix, e.g.::

    [Ruby Ring] +25 to maximum Life
    [Ruby Ring] #% increased Attack Speed

A chosen tier's ``text`` is already the final string; without a tier the
generic template (with ``#`` placeholders) is shown.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from pickit.models import AffixSlot, SelectedItem
from pickit.stat_aggregator import FindAffix, TiersFor


def generate_preview_lines(
    item_slug: Optional[str],
    item: Optional[SelectedItem],
    slots: Sequence[AffixSlot],
    find_affix: FindAffix,
    tiers_for: TiersFor,
) -> List[str]:
    if not item_slug:
        return []

    item_label = (item.label if item is not None else "") or item_slug
    lines = []

    for index, slot in enumerate(slots or []):
        affix = find_affix(getattr(slot, "selected_affix_key", None))
        if affix is None:
            continue

        level = getattr(slot, "selected_tier_level", None)
        tier = None
        if level is not None:
            tier = next(
                (t for t in tiers_for(index) or [] if getattr(t, "level", None) == level),
                None,
            )

        tier_text = tier.text.strip() if tier is not None and isinstance(tier.text, str) else ""
        text = tier_text or affix.template.strip()
        if not text:
            continue

        lines.append(f"[{item_label}] {text}")

    return lines
