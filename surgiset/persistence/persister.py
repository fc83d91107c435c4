"""Write-behind persistence.

:class:`Persister` queues ``save`` calls onto a single background worker so
callers never wait for storage. Writes run in submission order. A failed
write is logged and dropped; the in-memory state stays authoritative.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from threading import Lock
from typing import List

from surgiset.persistence.base import StorageBackend, StorageError
from surgiset.types import Namespace

logger = logging.getLogger(__name__)


class Persister:
    def __init__(self, storage: StorageBackend) -> None:
        self.storage = storage
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="surgiset-persist"
        )
        self._pending: List[Future[None]] = []
        self._lock = Lock()
        self._closed = False

    def submit(self, namespace: Namespace, blob: str) -> None:
        """Queue ``blob`` to be saved under ``namespace`` and return immediately."""
        with self._lock:
            if self._closed:
                logger.warning("Persister closed; dropping write to %s", namespace)
                return
            self._pending = [f for f in self._pending if not f.done()]
            self._pending.append(self._executor.submit(self._save, namespace, blob))

    def clear(self, namespace: Namespace) -> None:
        """Queue removal of ``namespace`` behind any pending writes."""
        with self._lock:
            if self._closed:
                logger.warning("Persister closed; dropping clear of %s", namespace)
                return
            self._pending = [f for f in self._pending if not f.done()]
            self._pending.append(self._executor.submit(self._clear, namespace))

    def _save(self, namespace: Namespace, blob: str) -> None:
        try:
            self.storage.save(namespace, blob)
        except StorageError:
            logger.exception("Failed to persist %s", namespace)

    def _clear(self, namespace: Namespace) -> None:
        try:
            self.storage.clear(namespace)
        except StorageError:
            logger.exception("Failed to clear %s", namespace)

    def flush(self, timeout: float | None = None) -> None:
        """Block until every queued write has finished."""
        with self._lock:
            pending = list(self._pending)
        wait(pending, timeout=timeout)

    def close(self) -> None:
        """Flush outstanding writes and stop the worker."""
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=True)
