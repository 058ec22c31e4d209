"""
Affix identity helpers.

An affix's key is used both as the selection value of a slot and for
uniqueness comparisons across slots. Two affixes are the same selectable
option iff their keys are equal.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from pickit.models import AffixDefinition

# Not expected in any catalog field; the key of a malformed affix is
# four separators with nothing between them.
AFFIX_KEY_SEPARATOR = "|"

KEY_FIELDS = ("kind", "domain", "family_key", "identifier", "template")

MALFORMED_AFFIX_KEY = AFFIX_KEY_SEPARATOR * (len(KEY_FIELDS) - 1)


def affix_key(affix: Any) -> str:
    """
    Build the composite key ``kind|domain|family_key|identifier|template``.

    Accepts an AffixDefinition or a raw catalog mapping. Fields that are
    missing or not strings contribute an empty string.
    """
    if isinstance(affix, AffixDefinition):
        values = [getattr(affix, name) for name in KEY_FIELDS]
    elif isinstance(affix, Mapping):
        values = [affix.get(name) for name in KEY_FIELDS]
    else:
        return MALFORMED_AFFIX_KEY

    return AFFIX_KEY_SEPARATOR.join(
        value if isinstance(value, str) else "" for value in values
    )


def find_affix_by_key(
    catalog: Optional[Iterable[AffixDefinition]],
    key: Optional[str],
) -> Optional[AffixDefinition]:
    """Return the first affix in ``catalog`` whose key equals ``key``."""
    if not key or not catalog:
        return None
    for affix in catalog:
        if affix_key(affix) == key:
            return affix
    return None
