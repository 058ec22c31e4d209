"""
Rule-Line Compiler

Turns the current row selection into pickit rule lines:

    // Rule for Magic Ring -> StashItem with affixes: +# to maximum Life (T1)
    [Category] == "Ring" && [Rarity] == "Magic" # [life] >= "20" && [life] <= "30" && [StashItem] == "true"

The part before ``#`` is checked before identification, the part after it
once the item is identified. Output is recomputed from scratch on every
call; the compiler never raises on partial or malformed input, it falls
back to a placeholder rule or leaves the offending piece out.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from pickit.constants import (
    ACTION_FLAGS,
    ANY_TIER_LABEL,
    COMMENT_PREFIX,
    CONDITION_JOINER,
    CONFIG_TYPE_ITEMS,
    DEFAULT_ACTION_FLAG,
    RARE_AFFIX_THRESHOLD,
    RARITY_MAGIC,
    RARITY_NORMAL,
    RARITY_RARE,
    RULE_SEPARATOR,
    UNKNOWN_CATEGORY,
)
from pickit.models import AffixSlot
from pickit.stat_aggregator import FindAffix, TiersFor, aggregate_stats
from pickit.tiers import tier_rank_label

logger = logging.getLogger(__name__)


@dataclass
class RuleContext:
    """Everything the compiler reads. Callbacks must not raise."""
    config_type: str
    pickit_category: Optional[str]
    slots: Sequence[AffixSlot]
    find_affix: FindAffix
    tiers_for: TiersFor
    action_flag: Optional[str] = None
    allowed_action_flags: Sequence[str] = field(default_factory=lambda: list(ACTION_FLAGS))
    default_action_flag: str = DEFAULT_ACTION_FLAG


def format_number(value: float) -> str:
    """Render 20.0 as "20" and 1.5 as "1.5"."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def equals_condition(name: str, value: str) -> str:
    return f'[{name}] == "{value}"'


def infer_rarity(slots: Iterable[AffixSlot]) -> str:
    """Normal with no selected affix, Magic with 1-2, Rare with 3 or more."""
    selected = sum(1 for slot in slots or [] if getattr(slot, "selected_affix_key", None))
    if selected == 0:
        return RARITY_NORMAL
    if selected < RARE_AFFIX_THRESHOLD:
        return RARITY_MAGIC
    return RARITY_RARE


def resolve_action_flag(
    flag: Optional[str],
    allowed: Sequence[str] = ACTION_FLAGS,
    default: str = DEFAULT_ACTION_FLAG,
) -> str:
    """Return the trimmed flag if it is allowed, otherwise the default."""
    candidate = flag.strip() if isinstance(flag, str) else ""
    if candidate in allowed:
        return candidate
    if candidate:
        logger.debug("Unknown action flag %r, using %s", candidate, default)
    return default


def fallback_rule_line(default_action_flag: str = DEFAULT_ACTION_FLAG) -> str:
    """The placeholder rule shown while no category is configured."""
    return (
        f"{equals_condition('Category', UNKNOWN_CATEGORY)} {RULE_SEPARATOR} "
        f"{equals_condition(default_action_flag, 'true')}"
    )


def stat_conditions(context: RuleContext) -> List[str]:
    """
    ">=" and "<=" conditions per stat id, using the combined bounds.

    Each stat id is emitted once, at its first appearance in slot order.
    """
    aggregation = aggregate_stats(context.slots, context.find_affix, context.tiers_for)
    conditions = []
    for stat_id in aggregation.first_appearance_order():
        total = aggregation.totals[stat_id]
        conditions.append(f'[{stat_id}] >= "{format_number(total.min)}"')
        conditions.append(f'[{stat_id}] <= "{format_number(total.max)}"')
    return conditions


def _affix_descriptions(context: RuleContext) -> List[str]:
    descriptions = []
    for index, slot in enumerate(context.slots or []):
        affix = context.find_affix(getattr(slot, "selected_affix_key", None))
        if affix is None:
            continue
        level = getattr(slot, "selected_tier_level", None)
        if level is None:
            rank_label = ANY_TIER_LABEL
        else:
            rank_label = tier_rank_label(context.tiers_for(index) or [], level)
        template = affix.template.strip() or affix.family_key or "?"
        descriptions.append(f"{template} ({rank_label})")
    return descriptions


def comment_line(context: RuleContext, category: str, rarity: str, action: str) -> str:
    line = f"{COMMENT_PREFIX} Rule for {rarity} {category} -> {action}"
    descriptions = _affix_descriptions(context)
    if descriptions:
        line += " with affixes: " + ", ".join(descriptions)
    return line


def compile_rule_lines(context: RuleContext) -> List[str]:
    """
    Compile the row into output lines.

    Returns:
        [] for config types other than "items"; the single fallback line
        when no category is set; otherwise the comment line and the rule.
    """
    if context.config_type != CONFIG_TYPE_ITEMS:
        return []

    default_flag = context.default_action_flag
    category = context.pickit_category.strip() if isinstance(context.pickit_category, str) else ""
    if not category:
        return [fallback_rule_line(default_flag)]

    rarity = infer_rarity(context.slots)
    action = resolve_action_flag(context.action_flag, context.allowed_action_flags, default_flag)

    after_conditions = stat_conditions(context)
    after_conditions.append(equals_condition(action, "true"))

    before_clause = CONDITION_JOINER.join(
        [equals_condition("Category", category), equals_condition("Rarity", rarity)]
    )
    after_clause = CONDITION_JOINER.join(after_conditions)

    return [
        comment_line(context, category, rarity, action),
        f"{before_clause} {RULE_SEPARATOR} {after_clause}",
    ]
