"""
Tier Ranker

Maps an affix tier's raw ``level`` onto the rank players know from the
game: the highest level is T1, the next highest T2, and so on.

Example:
    levels [1, 10, 20]
    - level 20 => T1
    - level 10 => T2
    - level 1  => T3
"""
from __future__ import annotations

from typing import Any, Iterable, Optional

from pickit.constants import UNRESOLVED_RANK_LABEL
from pickit.models import is_finite_number


def tier_rank(tiers: Iterable[Any], level: Any) -> Optional[int]:
    """
    Compute the 1-based rank of ``level`` within ``tiers``.

    Only numeric ordering of ``tier.level`` is used. Tiers without a
    finite level are ignored and duplicate levels count once.

    Args:
        tiers: Tier objects (or mappings) carrying a ``level``.
        level: The level to translate into a rank.

    Returns:
        1..N where 1 is the strongest tier, or None if not resolvable.
    """
    if tiers is None or not is_finite_number(level):
        return None

    levels = set()
    try:
        for tier in tiers:
            tier_level = tier.get("level") if isinstance(tier, dict) else getattr(tier, "level", None)
            if is_finite_number(tier_level):
                levels.add(tier_level)
    except TypeError:
        return None

    ascending = sorted(levels)
    if level not in levels:
        return None

    return len(ascending) - ascending.index(level)


def tier_rank_label(tiers: Iterable[Any], level: Any) -> str:
    """Render a rank as "T1", "T2", ... or "T?" when unresolvable."""
    rank = tier_rank(tiers, level)
    if rank is None:
        return UNRESOLVED_RANK_LABEL
    return f"T{rank}"
