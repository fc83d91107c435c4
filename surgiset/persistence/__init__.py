"""Persistence adapters.

Importing this package registers the built-in ``file`` and ``memory``
backends with :mod:`surgiset.persistence.base`.
"""

from . import file, memory  # registration side-effects
from .base import StorageBackend, StorageError, all_storage_sources
from .codec import DocumentError, dumps_state, loads_state
from .factory import make_storage
from .file import FileStorage
from .memory import MemoryStorage
from .persister import Persister
from .preferences import RecentSearches, ThemePreferences

__all__ = [
    "DocumentError",
    "FileStorage",
    "MemoryStorage",
    "Persister",
    "RecentSearches",
    "StorageBackend",
    "StorageError",
    "ThemePreferences",
    "all_storage_sources",
    "dumps_state",
    "loads_state",
    "make_storage",
]

_ = (file, memory)
