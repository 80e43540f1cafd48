"""Storage backends for rendered images. Protocol + the default implementation writing one file per key."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from src.cache.fingerprint import CacheKey
from src.core.exceptions import CacheError

logger = logging.getLogger(__name__)


class ArtifactStore(Protocol):
    """Append-only, content-addressed storage. Artifacts are created once and never modified."""

    def read(self, key: CacheKey) -> bytes | None:
        """Bytes stored under the key, if present."""
        ...

    def write(self, key: CacheKey, data: bytes) -> str:
        """Persist the bytes under the key and return where they ended up. Raises CacheError on failure."""
        ...


class FileArtifactStore:
    """<cache_root>/<key>, ex. ./cache/3f2a...9c.png"""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def path_for(self, key: CacheKey) -> Path:
        return self.root / key

    def read(self, key: CacheKey) -> bytes | None:
        path = self.path_for(key)
        if not path.is_file():
            return None
        return path.read_bytes()

    def write(self, key: CacheKey, data: bytes) -> str:
        path = self.path_for(key)
        try:
            if path.exists():
                # identical request -> identical bytes. First writer wins.
                return str(path)
            if not self.root.is_dir() or not os.access(self.root, os.W_OK):
                raise CacheError(f"Cache root {str(self.root)!r} is not a writable directory.")
            self._create(path, data)
        except OSError as e:
            raise CacheError(f"Could not write {str(path)!r}: {e}") from e

        logger.debug("Stored %d bytes at %s", len(data), path)
        return str(path)

    def _create(self, path: Path, data: bytes) -> None:
        """
        Write next to the target, then hard link it into place.

        Readers either see nothing or the complete file, and a file that already exists is never replaced.
        """
        fd, tmp_name = tempfile.mkstemp(dir=self.root, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as tmp_file:
                tmp_file.write(data)
            try:
                os.link(tmp_name, path)
            except FileExistsError:
                # a concurrent request for the same key got there first
                logger.debug("%s was stored by another request", path)
        finally:
            Path(tmp_name).unlink(missing_ok=True)
