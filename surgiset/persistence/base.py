from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol

from surgiset.config import Settings
from surgiset.types import Namespace

_NAMESPACE_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class StorageError(Exception):
    """A backend could not read, write or clear a namespace."""


class StorageBackend(Protocol):
    """Key-value capability the stores persist through.

    Values are serialized documents (strings). ``load`` returns ``None`` for a
    namespace that has never been saved or was cleared.
    """

    def load(self, namespace: Namespace) -> Optional[str]: ...

    def save(self, namespace: Namespace, blob: str) -> None: ...

    def clear(self, namespace: Namespace) -> None: ...


def check_namespace(namespace: Namespace) -> Namespace:
    if not _NAMESPACE_RE.match(namespace):
        raise StorageError(f"Invalid storage namespace: {namespace!r}")
    return namespace


@dataclass
class StorageSource:
    """Plugin describing a storage backend.

    Attributes:
        name: Value of ``Settings.storage_backend`` that selects this source.
        available: (settings) -> whether the backend can be used here.
        make_backend: (settings) -> backend instance.
        priority: Lower wins when ``storage_backend`` is ``"auto"``.
    """

    name: str
    available: Callable[[Settings], bool]
    make_backend: Callable[[Settings], StorageBackend]
    priority: int = 0


_STORAGE_SOURCE_REGISTRY: List[StorageSource] = []
_NAME_INDEX: Dict[str, StorageSource] = {}


def register_storage_source(source: StorageSource) -> None:
    if source.name in _NAME_INDEX:
        existing_idx = next(
            i for i, s in enumerate(_STORAGE_SOURCE_REGISTRY) if s.name == source.name
        )
        _STORAGE_SOURCE_REGISTRY[existing_idx] = source
    else:
        _STORAGE_SOURCE_REGISTRY.append(source)
    _NAME_INDEX[source.name] = source


def all_storage_sources() -> List[StorageSource]:
    """Return registered sources in auto-selection order."""
    return sorted(_STORAGE_SOURCE_REGISTRY, key=lambda s: (s.priority, s.name))


def find_storage_source(name: str) -> Optional[StorageSource]:
    return _NAME_INDEX.get(name)
