from .catalog import (
    Catalog,
    CatalogItem,
    CatalogSource,
    CatalogStats,
    default_catalog,
    get_catalog_stats,
    get_descriptions,
    get_instrument_by_id,
    get_instruments_by_description,
    load_catalog,
    search_catalog,
)

__all__ = [
    "Catalog",
    "CatalogItem",
    "CatalogSource",
    "CatalogStats",
    "default_catalog",
    "get_catalog_stats",
    "get_descriptions",
    "get_instrument_by_id",
    "get_instruments_by_description",
    "load_catalog",
    "search_catalog",
]
