"""
Catalog Store

Loads item types and per-item affix catalogs from the static data
directory:

    <data_dir>/items.json
    <data_dir>/affixes/<slug>.json

Affix files are cached in memory after the first successful load. Failed
loads are not cached, so a fixed file is picked up on the next call.
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from catalog.schemas import AffixFile, ItemRecord, ItemsFile
from pickit.models import AffixDefinition, SelectedItem
from pickit.result import Err, Ok, Result

logger = logging.getLogger(__name__)

ITEMS_FILE_NAME = "items.json"
AFFIXES_DIR_NAME = "affixes"

# Slugs become file names; anything else could escape the data directory
_SLUG_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_\-]*$")


class CatalogStore:
    """
    Item and affix catalog backed by local JSON files.

    State:
    - ``items``: item types from the last ``load_items`` call
    - ``items_load_error``: readable error of that call ("" if none)
    """

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self.items: List[SelectedItem] = []
        self.items_load_error: str = ""
        self._affixes_by_slug: Dict[str, List[AffixDefinition]] = {}

    def _read_json(self, path: Path) -> Result[Any, str]:
        try:
            with path.open("r", encoding="utf-8") as f:
                return Ok(json.load(f))
        except FileNotFoundError:
            return Err(f"File not found: {path}")
        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path}: {e}")
        except OSError as e:
            return Err(f"Failed to read {path}: {e}")

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def load_items(self) -> Result[List[SelectedItem], str]:
        """
        Load item types from items.json.

        Records that fail validation are skipped. On error ``items`` is
        emptied and ``items_load_error`` holds the message.
        """
        self.items_load_error = ""
        path = self.data_dir / ITEMS_FILE_NAME

        payload = self._read_json(path)
        if payload.is_err():
            logger.error("Failed to load items: %s", payload.error)
            self.items = []
            self.items_load_error = payload.error
            return Err(payload.error)

        try:
            envelope = ItemsFile.model_validate(payload.unwrap())
        except ValidationError as e:
            logger.warning("items.json has no usable 'items' list: %s", e.error_count())
            envelope = ItemsFile()

        items = []
        for raw in envelope.items:
            try:
                items.append(ItemRecord.model_validate(raw).to_selected_item())
            except ValidationError:
                logger.debug("Skipping invalid item record: %r", raw)

        self.items = items
        logger.info("Loaded %d items from %s", len(items), path)
        return Ok(items)

    def find_item(self, slug: Optional[str]) -> Optional[SelectedItem]:
        if not slug:
            return None
        for item in self.items:
            if item.slug == slug:
                return item
        return None

    # ------------------------------------------------------------------
    # Affixes
    # ------------------------------------------------------------------

    def get_affixes_for_slug(self, slug: Optional[str]) -> Result[List[AffixDefinition], str]:
        """
        Load the affix catalog of one item type.

        Returns:
            Ok with the parsed affixes (Ok([]) for an empty slug), or Err
            when the file is missing, unreadable or has the wrong schema.
        """
        if not slug:
            return Ok([])

        if slug in self._affixes_by_slug:
            return Ok(self._affixes_by_slug[slug])

        if not _SLUG_PATTERN.match(slug):
            return Err(f"Invalid item slug: {slug!r}")

        path = self.data_dir / AFFIXES_DIR_NAME / f"{slug}.json"
        payload = self._read_json(path)
        if payload.is_err():
            logger.error("Failed to load affixes for %s: %s", slug, payload.error)
            return Err(f"Failed to load affixes for {slug}: {payload.error}")

        try:
            envelope = AffixFile.model_validate(payload.unwrap())
        except ValidationError:
            message = f"Invalid schema for {slug}.json: expected {{ affixes: [...] }}"
            logger.error(message)
            return Err(message)

        affixes = []
        for raw in envelope.affixes:
            affix = AffixDefinition.from_dict(raw)
            if affix is None:
                logger.debug("Skipping invalid affix entry in %s: %r", slug, raw)
                continue
            affixes.append(affix)

        self._affixes_by_slug[slug] = affixes
        logger.info("Loaded %d affixes for %s", len(affixes), slug)
        return Ok(affixes)

    def clear_cache(self) -> None:
        self._affixes_by_slug.clear()
