"""Bundled reference catalog.

The catalog is a static JSON list scraped from supplier catalogues. Raw
entries carry a ``category`` which is exposed as the item ``description``.
Scraping also picked up section headers ("Thumb Forceps", "Chisels -
Osteotomes - Gouges", ...) as if they were instruments; those rows are
dropped when the catalog is loaded (see :func:`is_category_header`).

Lookups are plain case-insensitive substring filters and never mutate the
catalog.
"""

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from surgiset.components import InstrumentDraft

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 50

CATEGORY_HEADER_BLOCKLIST = frozenset(
    {
        "Thumb Forceps",
        "Dissectors & Elevators",
        "Nasal Speculums",
        "Nasal Forceps - Rongeurs",
        "Endoscopic Face & Forehead Lift",
        "Micro Vascular Clamps",
        "Ring Forceps - Clamps",
        "Mallets & Cartilage Instruments",
        "Measuring & Marking Instruments",
        "Skin Graft Instruments",
        "Chisels - Osteotomes - Gouges",
    }
)

GENERIC_TERMS = frozenset(
    {
        "forceps",
        "scissors",
        "cannulas",
        "instruments",
        "speculums",
        "clamps",
        "elevators",
        "dissectors",
    }
)


@dataclass(frozen=True)
class CatalogSource:
    """Provenance of a catalog entry."""

    catalogue: str
    page: int


@dataclass(frozen=True)
class CatalogItem:
    id: str
    name: str
    description: str
    image: str
    source: Optional[CatalogSource] = None

    def to_draft(self, quantity: int = 1) -> InstrumentDraft:
        """Pre-filled draft for adding this item to the inventory."""
        return InstrumentDraft(
            name=self.name,
            description=self.description,
            quantity=quantity,
            image=self.image or None,
        )

    def matches(self, term: str) -> bool:
        """``term`` must already be lower-cased and stripped."""
        return (
            term in self.name.lower()
            or term in self.description.lower()
            or (self.source is not None and term in self.source.catalogue.lower())
        )


@dataclass(frozen=True)
class CatalogStats:
    total_instruments: int
    descriptions: Mapping[str, int] = field(default_factory=dict)


def is_category_header(item: CatalogItem) -> bool:
    """Return True for scraped rows that are section headers, not instruments."""
    name = item.name.strip()
    name_lower = name.lower()
    if name in CATEGORY_HEADER_BLOCKLIST:
        return True
    if " - " in name_lower:
        return True
    if name_lower in GENERIC_TERMS:
        return True
    if name_lower.endswith(" instruments"):
        return True
    return name_lower == item.description.lower()


def item_from_raw(raw: Mapping[str, Any]) -> CatalogItem:
    source = raw.get("source")
    return CatalogItem(
        id=str(raw["id"]),
        name=str(raw["name"]),
        description=str(raw.get("category") or ""),
        image=str(raw.get("image") or ""),
        source=(
            CatalogSource(catalogue=str(source["catalogue"]), page=int(source["page"]))
            if isinstance(source, Mapping)
            else None
        ),
    )


class Catalog:
    def __init__(self, items: Sequence[CatalogItem]) -> None:
        self.items: Tuple[CatalogItem, ...] = tuple(
            item for item in items if not is_category_header(item)
        )

    @classmethod
    def from_raw(cls, rows: Sequence[Mapping[str, Any]]) -> "Catalog":
        return cls([item_from_raw(row) for row in rows])

    def __len__(self) -> int:
        return len(self.items)

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[CatalogItem]:
        """Return up to ``limit`` items matching ``query``.

        Matches are case-insensitive substrings of the name, the description
        or the source catalogue label. A blank query returns the first
        ``limit`` items.
        """
        term = query.strip().lower() if query else ""
        if not term:
            return list(self.items[:limit])
        results: List[CatalogItem] = []
        for item in self.items:
            if len(results) >= limit:
                break
            if item.matches(term):
                results.append(item)
        return results

    def descriptions(self) -> List[str]:
        return sorted({item.description for item in self.items})

    def by_description(
        self, description: str, offset: int = 0, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> List[CatalogItem]:
        filtered = [item for item in self.items if item.description == description]
        return filtered[offset : offset + limit]

    def stats(self) -> CatalogStats:
        counts: Dict[str, int] = {}
        for item in self.items:
            counts[item.description] = counts.get(item.description, 0) + 1
        return CatalogStats(total_instruments=len(self.items), descriptions=counts)

    def get(self, item_id: str) -> Optional[CatalogItem]:
        return next((item for item in self.items if item.id == item_id), None)


def load_catalog(path: Optional[Path] = None) -> Catalog:
    """Load a catalog from ``path`` or from the bundled ``data/catalog.json``."""
    if path is None:
        text = (
            resources.files("surgiset.catalog")
            .joinpath("data")
            .joinpath("catalog.json")
            .read_text(encoding="utf-8")
        )
    else:
        text = Path(path).read_text(encoding="utf-8")
    catalog = Catalog.from_raw(json.loads(text))
    logger.debug("Loaded %d catalog items", len(catalog))
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    return load_catalog()


def search_catalog(query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[CatalogItem]:
    return default_catalog().search(query, limit)


def get_descriptions() -> List[str]:
    return default_catalog().descriptions()


def get_instruments_by_description(
    description: str, offset: int = 0, limit: int = DEFAULT_SEARCH_LIMIT
) -> List[CatalogItem]:
    return default_catalog().by_description(description, offset, limit)


def get_catalog_stats() -> CatalogStats:
    return default_catalog().stats()


def get_instrument_by_id(item_id: str) -> Optional[CatalogItem]:
    return default_catalog().get(item_id)
