"""
catalog - Static item and affix catalog.

Public API:
- CatalogStore: loads items.json and affixes/<slug>.json with caching
- should_hide_affix / visible_affixes: the configurator's hide policy

Example:
    from catalog import CatalogStore, visible_affixes
    store = CatalogStore(Path("data"))
    affixes = visible_affixes(store.get_affixes_for_slug("ruby_ring").unwrap_or([]))
"""
from catalog.affix_filters import should_hide_affix, visible_affixes
from catalog.catalog_store import CatalogStore

__all__ = [
    "CatalogStore",
    "should_hide_affix",
    "visible_affixes",
]
