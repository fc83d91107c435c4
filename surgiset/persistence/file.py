"""Directory-backed storage backend.

Each namespace is one UTF-8 JSON file ``<directory>/<namespace>.json``.
Writes go to a temporary file in the same directory that is then moved over
the target, so a crash mid-write leaves the previous document intact.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from surgiset.config import Settings
from surgiset.persistence.base import (
    StorageError,
    StorageSource,
    check_namespace,
    register_storage_source,
)
from surgiset.types import Namespace

logger = logging.getLogger(__name__)


class FileStorage:
    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, namespace: Namespace) -> Path:
        return self.directory / f"{check_namespace(namespace)}.json"

    def load(self, namespace: Namespace) -> Optional[str]:
        path = self.path_for(namespace)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def save(self, namespace: Namespace, blob: str) -> None:
        path = self.path_for(namespace)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{path.stem}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(blob)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        logger.debug("Saved %s (%d bytes)", path, len(blob))

    def clear(self, namespace: Namespace) -> None:
        path = self.path_for(namespace)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}") from e


def data_dir_writable(settings: Settings) -> bool:
    """Return True if ``settings.data_dir`` exists (or can be made) and is writable."""
    try:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        return False
    return os.access(settings.data_dir, os.W_OK)


def _make_file_storage(settings: Settings) -> FileStorage:
    return FileStorage(settings.data_dir)


register_storage_source(
    StorageSource(
        name="file",
        available=data_dir_writable,
        make_backend=_make_file_storage,
        priority=0,
    )
)
