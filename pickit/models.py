"""
Data models for the affix slot engine.

Catalog records (items, affixes, tiers, stat ranges) are immutable once
loaded. Affix, tier and stat records offer a tolerant ``from_dict`` that
never raises: unusable records come back as ``None`` and bad sub-entries
are dropped. Item records are validated by ``catalog.schemas``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple
from uuid import uuid4


def is_finite_number(value: Any) -> bool:
    """True for real ints/floats that are finite (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _str_field(data: Mapping[str, Any], name: str) -> str:
    value = data.get(name)
    return value if isinstance(value, str) else ""


def _optional_str_field(data: Mapping[str, Any], name: str) -> Optional[str]:
    value = data.get(name)
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class StatRange:
    """A named numeric effect contributed by a tier."""
    id: str
    min: float
    max: float

    @classmethod
    def from_dict(cls, data: Any) -> Optional["StatRange"]:
        if not isinstance(data, Mapping):
            return None
        stat_id = data.get("id")
        low = data.get("min")
        high = data.get("max")
        if not isinstance(stat_id, str) or not stat_id:
            return None
        if not is_finite_number(low) or not is_finite_number(high):
            return None
        return cls(id=stat_id, min=low, max=high)


@dataclass(frozen=True)
class Tier:
    """One power level of an affix. Higher ``level`` means stronger."""
    level: int
    name: Optional[str] = None
    text: Optional[str] = None
    stats: Tuple[StatRange, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Tier"]:
        if not isinstance(data, Mapping):
            return None
        level = data.get("level")
        if not is_finite_number(level):
            return None

        raw_stats = data.get("stats")
        stats = []
        if isinstance(raw_stats, list):
            for raw in raw_stats:
                stat = StatRange.from_dict(raw)
                if stat is not None:
                    stats.append(stat)

        return cls(
            level=int(level) if float(level).is_integer() else level,
            name=_optional_str_field(data, "name"),
            text=_optional_str_field(data, "text"),
            stats=tuple(stats),
        )


@dataclass(frozen=True)
class AffixDefinition:
    """
    A selectable affix family with its tiers.

    ``kind`` is usually "prefix" or "suffix" but the catalog may carry
    other kinds (implicit, enchant, ...), which are grouped as "other".
    """
    kind: str
    domain: str
    family_key: str
    template: str
    identifier: Optional[str] = None
    tiers: Tuple[Tier, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> Optional["AffixDefinition"]:
        if not isinstance(data, Mapping):
            return None

        raw_tiers = data.get("tiers")
        tiers = []
        if isinstance(raw_tiers, list):
            for raw in raw_tiers:
                tier = Tier.from_dict(raw)
                if tier is not None:
                    tiers.append(tier)

        return cls(
            kind=_str_field(data, "kind"),
            domain=_str_field(data, "domain"),
            family_key=_str_field(data, "family_key"),
            template=_str_field(data, "template"),
            identifier=_optional_str_field(data, "identifier"),
            tiers=tuple(tiers),
        )

    def tier_for_level(self, level: Optional[int]) -> Optional[Tier]:
        """Return the tier with the given level, or None."""
        if level is None:
            return None
        for tier in self.tiers:
            if tier.level == level:
                return tier
        return None


@dataclass
class AffixSlot:
    """
    One selection unit: at most one affix and one tier.

    Mutated only through AffixSlotManager so the tier is always valid
    for the selected affix.
    """
    id: str = field(default_factory=lambda: uuid4().hex)
    selected_affix_key: Optional[str] = None
    selected_tier_level: Optional[int] = None


@dataclass(frozen=True)
class SelectedItem:
    """An item type from the catalog item list."""
    slug: str
    label: str
    category: str = ""
    pickit_category: Optional[str] = None
