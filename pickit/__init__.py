"""
pickit - Affix slot engine and rule-line compiler.

Public API:
- AffixSlotManager: slot add/remove, uniqueness and prefix/suffix caps
- aggregate_stats: per-slot stat order plus summed bounds
- compile_rule_lines: the comment line and the rule line of a row
- tier_rank / tier_rank_label: raw tier level to T1..TN
- affix_key / find_affix_by_key: affix identity

Example:
    from pickit import AffixSlotManager, RuleContext, compile_rule_lines
    manager = AffixSlotManager(affixes)
    manager.select_affix(0, affix_key(affixes[0]))
    lines = compile_rule_lines(RuleContext(
        config_type="items",
        pickit_category="Ring",
        slots=manager.slots,
        find_affix=manager.find_affix,
        tiers_for=manager.available_tiers,
    ))
"""
from pickit.affix_identity import affix_key, find_affix_by_key
from pickit.affix_slots import AffixSlotManager, KindCounts, OptionGroup, SlotLimits
from pickit.models import AffixDefinition, AffixSlot, SelectedItem, StatRange, Tier
from pickit.rule_compiler import RuleContext, compile_rule_lines
from pickit.stat_aggregator import StatAggregation, StatTotal, aggregate_stats
from pickit.tiers import tier_rank, tier_rank_label

__all__ = [
    "AffixDefinition",
    "AffixSlot",
    "AffixSlotManager",
    "KindCounts",
    "OptionGroup",
    "RuleContext",
    "SelectedItem",
    "SlotLimits",
    "StatAggregation",
    "StatRange",
    "StatTotal",
    "Tier",
    "affix_key",
    "aggregate_stats",
    "compile_rule_lines",
    "find_affix_by_key",
    "tier_rank",
    "tier_rank_label",
]
