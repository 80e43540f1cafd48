"""
Cache of rendered board images in front of an ArtifactStore.

Failures of the store never leave this module: a read that fails is a miss, a write that fails is reported
through the returned CachedArtifact. Either way the caller still has an image to send back.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from src.cache.fingerprint import CacheKey
from src.cache.sql_store import SQLArtifactStore, create_store_engine
from src.cache.store import ArtifactStore, FileArtifactStore
from src.core.config import RenderConfig
from src.core.exceptions import CacheError
from src.core.shared_types import CacheBackend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedArtifact:
    """Encoded image + where it was stored (None if it could not be stored)"""

    key: CacheKey
    data: bytes
    location: Optional[str]

    @property
    def stored(self) -> bool:
        return self.location is not None


class ArtifactCache:
    def __init__(self, store: ArtifactStore) -> None:
        self.store = store

    def get(self, key: CacheKey) -> bytes | None:
        """Cached bytes, or None on a miss. An unreadable entry counts as a miss."""
        try:
            data = self.store.read(key)
        except (OSError, SQLAlchemyError) as e:
            logger.warning("Could not read cached artifact %s, rendering again: %s", key, e)
            return None

        if data is None:
            logger.debug("Cache miss for %s", key)
        else:
            logger.debug("Cache hit for %s", key)
        return data

    def put(self, key: CacheKey, data: bytes) -> CachedArtifact:
        """Store the bytes. Best effort: when the store fails the artifact comes back without a location."""
        try:
            location = self.store.write(key, data)
        except (CacheError, OSError, SQLAlchemyError) as e:
            logger.warning("Serving %s without caching it: %s", key, e)
            return CachedArtifact(key, data, None)
        return CachedArtifact(key, data, location)


def build_store(config: RenderConfig) -> ArtifactStore:
    """The storage backend selected in the configuration"""
    if config.cache_backend == CacheBackend.SQL:
        return SQLArtifactStore(create_store_engine(config.database_url))
    return FileArtifactStore(config.cache_root)
