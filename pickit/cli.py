"""
Command-line interface for compiling pickit rule lines.

Builds one rule row from the static catalog and prints its lines.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from catalog.catalog_store import CatalogStore
from pickit.affix_identity import affix_key
from pickit.config import Config
from pickit.logging_setup import setup_logging
from pickit.session import RuleRowSession
from pickit.tiers import tier_rank_label

logger = logging.getLogger(__name__)


def parse_affix_arg(value: str) -> Tuple[str, Optional[int]]:
    """Split "TEXT@LEVEL" into (TEXT, LEVEL); LEVEL is optional."""
    text, sep, level = value.rpartition("@")
    if sep and text and level.strip().lstrip("-").isdigit():
        return text.strip(), int(level)
    return value.strip(), None


def match_option_key(session: RuleRowSession, index: int, wanted: str) -> Optional[str]:
    """Find an option of slot ``index`` by exact key or by template (case-insensitive)."""
    candidates = [affix for group in session.slots.options_for(index) for affix in group.items]
    for affix in candidates:
        if affix_key(affix) == wanted:
            return affix_key(affix)
    for affix in candidates:
        if affix.template.casefold() == wanted.casefold():
            return affix_key(affix)
    return None


def print_items(store: CatalogStore) -> None:
    print(f"\n{'='*60}")
    print(" Item types")
    print(f"{'='*60}")
    for item in store.items:
        category = item.pickit_category or "-"
        print(f"  {item.slug:24} {item.label:28} [{category}]")


def print_affix_options(session: RuleRowSession) -> None:
    for group in session.slots.options_for(0):
        print(f"\n{group.label}")
        for affix in group.items:
            ranks = ", ".join(
                f"{tier.level}={tier_rank_label(affix.tiers, tier.level)}"
                for tier in sorted(affix.tiers, key=lambda t: t.level, reverse=True)
            )
            print(f"  {affix.template}")
            if ranks:
                print(f"      levels: {ranks}")


def apply_affix_args(session: RuleRowSession, affix_args: List[str]) -> bool:
    for index, raw in enumerate(affix_args):
        text, level = parse_affix_arg(raw)

        if index > 0 and not session.slots.add_slot():
            print(f"Cannot add affix '{text}': {session.slots.add_blocked_reason}", file=sys.stderr)
            return False

        key = match_option_key(session, index, text)
        if key is None or not session.slots.select_affix(index, key):
            print(f"Affix not selectable in slot {index + 1}: '{text}'", file=sys.stderr)
            return False

        if level is not None and not session.slots.select_tier(index, level):
            print(f"Affix '{text}' has no tier at level {level}", file=sys.stderr)
            return False

    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compile pickit rule lines from the affix catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pickit-compile --list-items
  pickit-compile --item ruby_ring --list-affixes
  pickit-compile --item ruby_ring --affix "+# to maximum Life@82"
  pickit-compile --item ruby_ring --affix "+# to maximum Life" --affix "+#% to Fire Resistance@60" --action Salvage
        """,
    )
    parser.add_argument("--data-dir", type=Path, help="Catalog directory (default: from config)")
    parser.add_argument("--config", type=Path, help="Config JSON file")
    parser.add_argument("--item", help="Item slug")
    parser.add_argument(
        "--affix",
        action="append",
        default=[],
        metavar="TEXT[@LEVEL]",
        help="Affix template or key, optionally with a tier level (repeatable)",
    )
    parser.add_argument("--action", help="Action flag (StashItem, StashUnid, Salvage, IgnoreRitual)")
    parser.add_argument("--list-items", action="store_true", help="List item types and exit")
    parser.add_argument("--list-affixes", action="store_true", help="List the item's affixes and exit")
    parser.add_argument("--preview", action="store_true", help="Also print the human-readable preview")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress info messages")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(debug=args.debug, quiet=args.quiet)

    config = Config(args.config)
    store = CatalogStore(args.data_dir or config.data_dir)

    loaded = store.load_items()
    if loaded.is_err():
        print(f"Error: {loaded.error}", file=sys.stderr)
        return 1

    if args.list_items:
        print_items(store)
        return 0

    session = RuleRowSession(store, config)
    if args.item and not session.select_item(args.item):
        print(f"Error: {session.load_error}", file=sys.stderr)
        return 1

    if args.list_affixes:
        print_affix_options(session)
        return 0

    if not apply_affix_args(session, args.affix):
        return 1

    if args.action is not None:
        session.action_flag = args.action

    for line in session.compile():
        print(line)

    if args.preview:
        for line in session.preview_lines():
            print(line)

    return 0


if __name__ == "__main__":
    sys.exit(main())
