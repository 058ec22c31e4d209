"""
Constants for the pickit configurator.

Centralizes slot caps, rule-line tokens and the action flag vocabulary.
"""

# =============================================================================
# Slot Caps
# =============================================================================

# Maximum number of affix slots on one rule row
DEFAULT_MAX_SLOTS = 6

# Maximum prefixes / suffixes a single item can roll
DEFAULT_MAX_PREFIXES = 3
DEFAULT_MAX_SUFFIXES = 3


# =============================================================================
# Affix Kinds
# =============================================================================

KIND_PREFIX = "prefix"
KIND_SUFFIX = "suffix"

# Option group labels, in display order
GROUP_LABEL_PREFIXES = "-- Prefixes --"
GROUP_LABEL_SUFFIXES = "-- Suffixes --"
GROUP_LABEL_OTHER = "-- Other --"


# =============================================================================
# Rarity
# =============================================================================

RARITY_NORMAL = "Normal"
RARITY_MAGIC = "Magic"
RARITY_RARE = "Rare"

# Selected affix count at which an item is considered Rare
RARE_AFFIX_THRESHOLD = 3


# =============================================================================
# Action Flags
# =============================================================================

ACTION_STASH = "StashItem"
ACTION_STASH_UNID = "StashUnid"
ACTION_SALVAGE = "Salvage"
ACTION_IGNORE_RITUAL = "IgnoreRitual"

ACTION_FLAGS = (
    ACTION_STASH,
    ACTION_STASH_UNID,
    ACTION_SALVAGE,
    ACTION_IGNORE_RITUAL,
)

DEFAULT_ACTION_FLAG = ACTION_STASH


# =============================================================================
# Rule Lines
# =============================================================================

# Only this config type produces rule lines
CONFIG_TYPE_ITEMS = "items"

UNKNOWN_CATEGORY = "UNKNOWN"

# Separates the before-identify and after-identify halves of a rule
RULE_SEPARATOR = "#"

CONDITION_JOINER = " && "

COMMENT_PREFIX = "//"

# Rendered when a tier cannot be mapped to a rank
UNRESOLVED_RANK_LABEL = "T?"

# Rendered when a slot has an affix but no tier
ANY_TIER_LABEL = "any tier"
