import logging

from surgiset.config import Settings
from surgiset.persistence.base import (
    StorageBackend,
    StorageError,
    all_storage_sources,
    find_storage_source,
)

logger = logging.getLogger(__name__)


def make_storage(settings: Settings) -> StorageBackend:
    """Build the storage backend named by ``settings.storage_backend``.

    ``"auto"`` walks registered sources in priority order and takes the first
    one available in this environment.

    Raises:
        StorageError: If the named backend is unknown or unavailable, or no
            backend is available at all.
    """
    if settings.storage_backend != "auto":
        source = find_storage_source(settings.storage_backend)
        if source is None:
            raise StorageError(f"Unknown storage backend: {settings.storage_backend}")
        if not source.available(settings):
            raise StorageError(f"Storage backend {source.name!r} is not available")
        return source.make_backend(settings)

    for source in all_storage_sources():
        if source.available(settings):
            logger.info("Using %s storage backend", source.name)
            return source.make_backend(settings)
    raise StorageError("No storage backend is available")
