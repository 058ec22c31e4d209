"""
Affix hide rules for the configurator.

Affix files contain families that are not part of the configurable pool:

1. domain "item" with kind "unique" or "corrupted": special-case stats
   outside the normal pool
2. every "desecrated" domain affix

The slot engine assumes these are already gone, so every catalog that
reaches it goes through ``visible_affixes`` first.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from pickit.models import AffixDefinition

HIDDEN_DOMAINS = frozenset({"desecrated"})

# (domain, kind) pairs that are hidden
HIDDEN_DOMAIN_KINDS = frozenset({
    ("item", "unique"),
    ("item", "corrupted"),
})


def should_hide_affix(affix: Any) -> bool:
    """
    Returns True if the affix should be hidden from selection.

    Invalid input is hidden.
    """
    if isinstance(affix, AffixDefinition):
        domain, kind = affix.domain, affix.kind
    elif isinstance(affix, Mapping):
        domain = affix.get("domain") if isinstance(affix.get("domain"), str) else ""
        kind = affix.get("kind") if isinstance(affix.get("kind"), str) else ""
    else:
        return True

    if (domain, kind) in HIDDEN_DOMAIN_KINDS:
        return True
    if domain in HIDDEN_DOMAINS:
        return True
    return False


def visible_affixes(affixes: Iterable[AffixDefinition]) -> List[AffixDefinition]:
    """Drop hidden affixes, keeping catalog order."""
    return [affix for affix in affixes or [] if not should_hide_affix(affix)]
