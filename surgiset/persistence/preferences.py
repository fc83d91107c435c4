"""Small preference stores persisted beside the inventory.

* :class:`ThemePreferences` holds the dark-mode flag
    (``{"state": {"isDarkMode": bool}, "version": 0}``).
* :class:`RecentSearches` keeps the last few catalog search terms as a JSON
    list, most recent first, without duplicates.

Both load once at construction and queue a write after every change. A
missing or unreadable document falls back to the default value.
"""

import json
import logging
from typing import Any, Optional, Tuple

from surgiset.persistence.base import StorageBackend, StorageError
from surgiset.persistence.persister import Persister
from surgiset.types import Namespace

logger = logging.getLogger(__name__)

DEFAULT_RECENT_SEARCHES_LIMIT = 5


def _load_json(storage: StorageBackend, namespace: Namespace) -> Optional[Any]:
    try:
        blob = storage.load(namespace)
    except StorageError:
        logger.exception("Failed to load %s", namespace)
        return None
    if blob is None:
        return None
    try:
        return json.loads(blob)
    except json.JSONDecodeError:
        logger.warning("Ignoring corrupt document in %s", namespace)
        return None


class ThemePreferences:
    def __init__(
        self, storage: StorageBackend, persister: Persister, namespace: Namespace
    ) -> None:
        self.namespace = namespace
        self._persister = persister
        self.is_dark_mode = False
        document = _load_json(storage, namespace)
        if isinstance(document, dict):
            body = document.get("state", document)
            if isinstance(body, dict):
                self.is_dark_mode = bool(body.get("isDarkMode", False))

    def toggle_theme(self) -> bool:
        return self.set_dark_mode(not self.is_dark_mode)

    def set_dark_mode(self, enabled: bool) -> bool:
        self.is_dark_mode = enabled
        self._persister.submit(
            self.namespace,
            json.dumps({"state": {"isDarkMode": enabled}, "version": 0}),
        )
        return enabled


class RecentSearches:
    def __init__(
        self,
        storage: StorageBackend,
        persister: Persister,
        namespace: Namespace,
        limit: int = DEFAULT_RECENT_SEARCHES_LIMIT,
    ) -> None:
        self.namespace = namespace
        self.limit = limit
        self._persister = persister
        self.terms: Tuple[str, ...] = ()
        document = _load_json(storage, namespace)
        if isinstance(document, list):
            self.terms = tuple(t for t in document if isinstance(t, str))[:limit]

    def add(self, term: str) -> Tuple[str, ...]:
        """Record ``term`` as the most recent search; blank terms are ignored."""
        if not term.strip():
            return self.terms
        self.terms = (term, *(t for t in self.terms if t != term))[: self.limit]
        self._persister.submit(self.namespace, json.dumps(list(self.terms)))
        return self.terms

    def clear(self) -> None:
        self.terms = ()
        self._persister.clear(self.namespace)
