"""Application root.

:func:`create_app` builds everything a front end needs from one
:class:`surgiset.config.Settings`: the storage backend, the write-behind
persister, the inventory store (loaded from storage, or the starter state on
first launch), the preference stores and the catalog. The returned
:class:`Application` lives for the whole process; call
:meth:`Application.close` on shutdown to flush pending writes.

Example::

    app = create_app()
    app.store.add_instrument(app.catalog.search("adson")[0].to_draft())
    app.export_audit()
    app.close()
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from surgiset.catalog import Catalog, CatalogItem, default_catalog
from surgiset.components import InstrumentDraft
from surgiset.config import Settings, settings as default_settings
from surgiset.examples.starter import starter_state
from surgiset.persistence import (
    Persister,
    RecentSearches,
    StorageBackend,
    ThemePreferences,
    make_storage,
)
from surgiset.renderer.audit import export_audit
from surgiset.services.images import save_image
from surgiset.state import State
from surgiset.store import InstrumentStore, load_state

logger = logging.getLogger(__name__)


@dataclass
class Application:
    settings: Settings
    storage: StorageBackend
    persister: Persister
    store: InstrumentStore
    theme: ThemePreferences
    recent_searches: RecentSearches
    catalog: Catalog

    def search(self, query: str, limit: Optional[int] = None) -> List[CatalogItem]:
        """Search the catalog and remember non-blank queries."""
        if limit is None:
            limit = self.settings.search_limit
        results = self.catalog.search(query, limit)
        self.recent_searches.add(query)
        return results

    def add_from_catalog(self, item: CatalogItem, quantity: int = 1) -> State:
        return self.store.add_instrument(item.to_draft(quantity))

    def add_with_photo(self, draft: InstrumentDraft, photo: Path) -> State:
        """Add ``draft`` with ``photo`` stored in the app image directory."""
        image = save_image(
            photo,
            self.settings.image_dir,
            size=self.settings.image_size,
            quality=self.settings.image_quality,
        )
        return self.store.add_instrument(
            InstrumentDraft(
                name=draft.name,
                description=draft.description,
                quantity=draft.quantity,
                image=image,
                is_wishlist=draft.is_wishlist,
            )
        )

    def export_audit(self, directory: Optional[Path] = None) -> Path:
        state = self.store.state
        return export_audit(
            state.inventory, state.sets, directory or self.settings.export_dir
        )

    def close(self) -> None:
        self.persister.close()


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[StorageBackend] = None,
    catalog: Optional[Catalog] = None,
    initial_state: Callable[[], State] = starter_state,
) -> Application:
    settings = settings or default_settings
    storage = storage if storage is not None else make_storage(settings)
    persister = Persister(storage)
    state = load_state(storage, settings.inventory_namespace, initial_state)
    logger.info(
        "Loaded %d instruments and %d sets", len(state.inventory), len(state.sets)
    )
    return Application(
        settings=settings,
        storage=storage,
        persister=persister,
        store=InstrumentStore(state, persister, settings.inventory_namespace),
        theme=ThemePreferences(storage, persister, settings.theme_namespace),
        recent_searches=RecentSearches(
            storage,
            persister,
            settings.recent_searches_namespace,
            limit=settings.recent_searches_limit,
        ),
        catalog=catalog if catalog is not None else default_catalog(),
    )
