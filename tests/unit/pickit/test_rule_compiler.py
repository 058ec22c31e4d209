"""Tests for pickit/rule_compiler.py - compiling a row into rule lines."""

import pytest

from pickit.affix_slots import AffixSlotManager
from pickit.models import AffixSlot
from pickit.rule_compiler import (
    RuleContext,
    compile_rule_lines,
    fallback_rule_line,
    format_number,
    infer_rarity,
    resolve_action_flag,
)
from tests.conftest_utils import make_affix, make_tier, select

pytestmark = pytest.mark.unit

FALLBACK = '[Category] == "UNKNOWN" # [StashItem] == "true"'


def context_for(manager, category="Ring", action=None, config_type="items"):
    return RuleContext(
        config_type=config_type,
        pickit_category=category,
        slots=manager.slots,
        find_affix=manager.find_affix,
        tiers_for=manager.available_tiers,
        action_flag=action,
    )


# =============================================================================
# Building blocks
# =============================================================================


class TestInferRarity:
    """Rarity depends only on how many slots have an affix."""

    @pytest.mark.parametrize("selected,expected", [
        (0, "Normal"),
        (1, "Magic"),
        (2, "Magic"),
        (3, "Rare"),
        (6, "Rare"),
    ])
    def test_rarity_table(self, selected, expected):
        slots = [AffixSlot(selected_affix_key=f"k{i}") for i in range(selected)]
        slots.append(AffixSlot())
        assert infer_rarity(slots) == expected

    def test_unresolvable_keys_still_count(self):
        slots = [AffixSlot(selected_affix_key="no|such|affix||")]
        assert infer_rarity(slots) == "Magic"


class TestResolveActionFlag:
    """Tests for resolve_action_flag."""

    @pytest.mark.parametrize("flag", ["StashItem", "StashUnid", "Salvage", "IgnoreRitual"])
    def test_allowed_flags(self, flag):
        assert resolve_action_flag(flag) == flag

    def test_trims_whitespace(self):
        assert resolve_action_flag("  Salvage \n") == "Salvage"

    @pytest.mark.parametrize("flag", [None, "", "   ", "salvage", "DeleteItem", 42])
    def test_falls_back_to_stash(self, flag):
        assert resolve_action_flag(flag) == "StashItem"

    def test_custom_allow_list(self):
        assert resolve_action_flag("Keep", allowed=["Keep"], default="Keep") == "Keep"
        assert resolve_action_flag("Salvage", allowed=["Keep"], default="Keep") == "Keep"


class TestFormatNumber:
    @pytest.mark.parametrize("value,expected", [(20, "20"), (20.0, "20"), (1.5, "1.5"), (-3, "-3")])
    def test_format(self, value, expected):
        assert format_number(value) == expected


def test_fallback_rule_line():
    assert fallback_rule_line() == FALLBACK


# =============================================================================
# compile_rule_lines
# =============================================================================


class TestCompileRuleLines:
    """Tests for the full compile."""

    def test_only_items_config_type(self, manager):
        assert compile_rule_lines(context_for(manager, config_type="currency")) == []

    @pytest.mark.parametrize("category", [None, "", "   "])
    def test_missing_category_gives_fallback(self, manager, life_affix, category):
        select(manager, 0, life_affix, level=44)
        assert compile_rule_lines(context_for(manager, category=category)) == [FALLBACK]

    def test_one_affix_one_tier(self, manager, life_affix):
        select(manager, 0, life_affix, level=44)

        lines = compile_rule_lines(context_for(manager))

        assert lines == [
            "// Rule for Magic Ring -> StashItem with affixes: +# to maximum Life (T2)",
            '[Category] == "Ring" && [Rarity] == "Magic" # '
            '[life] >= "20" && [life] <= "30" && [StashItem] == "true"',
        ]

    def test_no_affixes(self, manager):
        lines = compile_rule_lines(context_for(manager, action="Salvage"))
        assert lines == [
            "// Rule for Normal Ring -> Salvage",
            '[Category] == "Ring" && [Rarity] == "Normal" # [Salvage] == "true"',
        ]

    def test_affix_without_tier(self, manager, life_affix):
        select(manager, 0, life_affix)
        lines = compile_rule_lines(context_for(manager))
        assert lines[0].endswith("with affixes: +# to maximum Life (any tier)")
        assert lines[1].endswith('# [StashItem] == "true"')

    def test_shared_stat_emitted_once_with_totals(self):
        a = make_affix("prefix", "+# to maximum Life", tiers=[make_tier(1, ("life", 10, 20))])
        b = make_affix("suffix", "+# to Life and Mana", tiers=[make_tier(1, ("life", 10, 20), ("mana", 5, 6))])
        manager = AffixSlotManager([a, b])
        select(manager, 0, a, level=1)
        select(manager, 1, b, level=1)

        rule = compile_rule_lines(context_for(manager))[1]
        after = rule.split(" # ", 1)[1]
        assert after == (
            '[life] >= "20" && [life] <= "40" && '
            '[mana] >= "5" && [mana] <= "6" && [StashItem] == "true"'
        )
        assert after.count("[life] >=") == 1

    def test_stat_order_follows_slots(self, manager, sample_affixes, life_affix):
        select(manager, 0, sample_affixes[4], level=60)   # fire_res
        select(manager, 1, life_affix, level=82)          # life
        after = compile_rule_lines(context_for(manager))[1].split(" # ", 1)[1]
        assert after.index("[fire_res]") < after.index("[life]")

    def test_three_affixes_is_rare(self, manager, sample_affixes):
        for index in range(3):
            select(manager, index, sample_affixes[index])
        rule = compile_rule_lines(context_for(manager))[1]
        assert rule.startswith('[Category] == "Ring" && [Rarity] == "Rare" #')

    def test_unknown_action_flag_not_propagated(self, manager):
        lines = compile_rule_lines(context_for(manager, action="DeleteEverything"))
        assert "DeleteEverything" not in "\n".join(lines)
        assert lines[1].endswith('[StashItem] == "true"')

    def test_comment_lists_affixes_in_slot_order(self, manager, sample_affixes, life_affix):
        select(manager, 0, sample_affixes[4], level=60)
        select(manager, 1, life_affix, level=1)
        comment = compile_rule_lines(context_for(manager))[0]
        assert comment.endswith("with affixes: +#% to Fire Resistance (T1), +# to maximum Life (T3)")

    def test_unresolvable_rank_label(self, life_affix):
        slot = AffixSlot(selected_affix_key="k", selected_tier_level=44)
        context = RuleContext(
            config_type="items",
            pickit_category="Ring",
            slots=[slot],
            find_affix=lambda key: life_affix if key == "k" else None,
            tiers_for=lambda index: [],
        )
        assert compile_rule_lines(context)[0].endswith("+# to maximum Life (T?)")

    def test_idempotent(self, manager, life_affix, sample_affixes):
        select(manager, 0, life_affix, level=82)
        select(manager, 1, sample_affixes[5], level=60)
        context = context_for(manager, action="StashUnid")
        assert compile_rule_lines(context) == compile_rule_lines(context)

    def test_category_is_trimmed(self, manager):
        rule = compile_rule_lines(context_for(manager, category="  Ring "))[1]
        assert rule.startswith('[Category] == "Ring"')
