"""Process-local storage backend.

Used when no writable data directory is available and throughout the tests.
Nothing survives the process.
"""

from typing import Dict, Optional

from surgiset.config import Settings
from surgiset.persistence.base import (
    StorageSource,
    check_namespace,
    register_storage_source,
)
from surgiset.types import Namespace


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[Namespace, str]] = None) -> None:
        self._data: Dict[Namespace, str] = dict(initial or {})

    def load(self, namespace: Namespace) -> Optional[str]:
        return self._data.get(check_namespace(namespace))

    def save(self, namespace: Namespace, blob: str) -> None:
        self._data[check_namespace(namespace)] = blob

    def clear(self, namespace: Namespace) -> None:
        self._data.pop(check_namespace(namespace), None)

    def __contains__(self, namespace: object) -> bool:
        return namespace in self._data


def _make_memory_storage(_settings: Settings) -> MemoryStorage:
    return MemoryStorage()


register_storage_source(
    StorageSource(
        name="memory",
        available=lambda _settings: True,
        make_backend=_make_memory_storage,
        priority=100,
    )
)
