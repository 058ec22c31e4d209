import faulthandler
import json
import sys
import uuid
from pathlib import Path

import pytest

from pickit.affix_slots import AffixSlotManager
from pickit.config import Config
from tests.conftest_utils import (
    SAMPLE_ITEMS,
    SAMPLE_RUBY_RING_AFFIXES,
    make_affix,
    make_tier,
)


# =============================================================================
# Catalog fixtures
# =============================================================================

@pytest.fixture
def life_affix():
    return make_affix(
        "prefix",
        "+# to maximum Life",
        family_key="IncreasedLife",
        tiers=[
            make_tier(1, ("life", 10, 19), text="+15 to maximum Life"),
            make_tier(44, ("life", 20, 30), text="+25 to maximum Life"),
            make_tier(82, ("life", 40, 49), text="+45 to maximum Life"),
        ],
    )


@pytest.fixture
def sample_affixes(life_affix):
    """Four prefixes, four suffixes and one implicit."""
    return [
        life_affix,
        make_affix("prefix", "+# to maximum Mana", tiers=[make_tier(1, ("mana", 10, 20))]),
        make_affix("prefix", "Adds # to # Fire Damage", tiers=[make_tier(5, ("fire_damage", 2, 4))]),
        make_affix("prefix", "#% increased Rarity of Items found", tiers=[make_tier(3, ("rarity", 6, 10))]),
        make_affix("suffix", "+#% to Fire Resistance", tiers=[make_tier(60, ("fire_res", 30, 35))]),
        make_affix("suffix", "+#% to Cold Resistance", tiers=[make_tier(60, ("cold_res", 30, 35))]),
        make_affix("suffix", "+# to Strength", tiers=[make_tier(11, ("strength", 8, 12))]),
        make_affix("suffix", "#% increased Attack Speed", tiers=[make_tier(30, ("attack_speed", 5, 7))]),
        make_affix("implicit", "+# to all Attributes", tiers=[make_tier(1, ("all_attributes", 4, 6))]),
    ]


@pytest.fixture
def manager(sample_affixes):
    return AffixSlotManager(sample_affixes)


@pytest.fixture
def data_dir(tmp_path):
    """A catalog directory with items.json and one affix file."""
    root = tmp_path / f"data_{uuid.uuid4().hex}"
    (root / "affixes").mkdir(parents=True)
    (root / "items.json").write_text(json.dumps(SAMPLE_ITEMS), encoding="utf-8")
    (root / "affixes" / "ruby_ring.json").write_text(
        json.dumps(SAMPLE_RUBY_RING_AFFIXES), encoding="utf-8"
    )
    return root


@pytest.fixture
def temp_config(tmp_path):
    """
    Provide a Config backed by an absent file, so every value is a default.

    This fixture GUARANTEES a clean config or fails loudly.
    """
    config = Config(config_file=tmp_path / f"config_{uuid.uuid4().hex}.json")

    assert config.max_slots == 6, f"FIXTURE CONTAMINATED! max_slots={config.max_slots}"
    assert config.default_action_flag == "StashItem", \
        f"FIXTURE CONTAMINATED! default_action_flag={config.default_action_flag}"

    return config


def pytest_collection_modifyitems(config, items):
    """Assign tier markers based on test location."""
    for item in items:
        path = Path(str(item.fspath)).as_posix()
        if "/tests/unit/" in path:
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


def pytest_sessionstart(session):  # pragma: no cover - test harness init
    """Enable faulthandler for the entire test run to aid diagnosing hangs."""
    faulthandler.enable(file=sys.stderr, all_threads=True)
