"""
Configuration for the pickit configurator.

Reads user settings (slot caps, action flags, catalog location) from a JSON
file and merges them over the defaults. Settings are read-only here.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pickit.affix_slots import SlotLimits
from pickit.constants import (
    ACTION_FLAGS,
    CONFIG_TYPE_ITEMS,
    DEFAULT_ACTION_FLAG,
    DEFAULT_MAX_PREFIXES,
    DEFAULT_MAX_SLOTS,
    DEFAULT_MAX_SUFFIXES,
)
from pickit.logging_setup import APP_DIR_NAME

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Path to the config directory (~/.pickit_configurator/)."""
    return Path.home() / APP_DIR_NAME


class Config:
    """
    Application configuration loaded from JSON.

    Key ideas:
    - Settings are grouped in sections ("slots", "rules", "catalog").
    - Missing sections or keys fall back to DEFAULT_CONFIG.
    - An unreadable file is logged and replaced by the defaults.
    """

    # NOTE: Treated as immutable. Use _default_config_deepcopy() for a
    # fresh copy.
    DEFAULT_CONFIG: Dict[str, Any] = {
        "slots": {
            "max_slots": DEFAULT_MAX_SLOTS,
            "max_prefixes": DEFAULT_MAX_PREFIXES,
            "max_suffixes": DEFAULT_MAX_SUFFIXES,
        },
        "rules": {
            # Only "items" produces rule lines
            "config_type": CONFIG_TYPE_ITEMS,
            "default_action_flag": DEFAULT_ACTION_FLAG,
            "action_flags": list(ACTION_FLAGS),
        },
        "catalog": {
            # Directory holding items.json and affixes/<slug>.json
            "data_dir": "data",
        },
    }

    def __init__(self, config_file: Optional[Path] = None) -> None:
        """
        Args:
            config_file: Optional path to a config JSON file. When omitted,
                         ~/.pickit_configurator/config.json is used.
        """
        self.config_file: Path = self._resolve_config_path(config_file)
        self.data: Dict[str, Any] = self._load()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_config_path(config_file: Optional[Path]) -> Path:
        if config_file is not None:
            return Path(config_file)
        return get_config_dir() / "config.json"

    def _load(self) -> Dict[str, Any]:
        """Load configuration from JSON file, merging with defaults."""
        if not self.config_file.exists():
            logger.info("No config file at %s, using defaults", self.config_file)
            return self._default_config_deepcopy()

        try:
            with self.config_file.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Failed to load config %s: %s. Using defaults.", self.config_file, exc)
            return self._default_config_deepcopy()

        if not isinstance(raw, dict):
            logger.error("Config %s is not a JSON object. Using defaults.", self.config_file)
            return self._default_config_deepcopy()

        logger.info("Config loaded from %s", self.config_file)
        return self._merge_with_defaults(raw)

    @classmethod
    def _default_config_deepcopy(cls) -> Dict[str, Any]:
        return copy.deepcopy(cls.DEFAULT_CONFIG)

    def _merge_with_defaults(self, user_config: Dict[str, Any]) -> Dict[str, Any]:
        """Merge user sections over default sections, key by key."""
        merged = self._default_config_deepcopy()

        for key, value in user_config.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key].update(value)
            else:
                merged[key] = value

        return merged

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.data.get(name)
        return section if isinstance(section, dict) else {}

    def _int_setting(self, section: str, key: str, minimum: int) -> int:
        default = self.DEFAULT_CONFIG[section][key]
        value = self._section(section).get(key, default)
        if isinstance(value, bool) or not isinstance(value, int):
            logger.warning("Invalid %s.%s=%r, using %r", section, key, value, default)
            value = default
        return max(minimum, value)

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    @property
    def max_slots(self) -> int:
        return self._int_setting("slots", "max_slots", minimum=1)

    @property
    def max_prefixes(self) -> int:
        return self._int_setting("slots", "max_prefixes", minimum=0)

    @property
    def max_suffixes(self) -> int:
        return self._int_setting("slots", "max_suffixes", minimum=0)

    def slot_limits(self) -> SlotLimits:
        return SlotLimits(
            max_slots=self.max_slots,
            max_prefixes=self.max_prefixes,
            max_suffixes=self.max_suffixes,
        )

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    @property
    def config_type(self) -> str:
        value = self._section("rules").get("config_type")
        return value if isinstance(value, str) else CONFIG_TYPE_ITEMS

    @property
    def action_flags(self) -> List[str]:
        """Allowed action flags; falls back to the built-in four."""
        value = self._section("rules").get("action_flags")
        if not isinstance(value, list):
            return list(ACTION_FLAGS)
        flags = [flag.strip() for flag in value if isinstance(flag, str) and flag.strip()]
        return flags or list(ACTION_FLAGS)

    @property
    def default_action_flag(self) -> str:
        value = self._section("rules").get("default_action_flag")
        if isinstance(value, str) and value.strip() in self.action_flags:
            return value.strip()
        return DEFAULT_ACTION_FLAG

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    @property
    def data_dir(self) -> Path:
        value = self._section("catalog").get("data_dir")
        return Path(value) if isinstance(value, str) and value else Path("data")
