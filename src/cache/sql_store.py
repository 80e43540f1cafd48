"""Implementation of ArtifactStore using SQLAlchemy"""

import logging

from sqlalchemy import Engine, create_engine, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from src.cache.fingerprint import CacheKey
from src.cache.schema import Base, DBArtifact
from src.core.exceptions import CacheError

logger = logging.getLogger(__name__)


def create_store_engine(database_url: str) -> Engine:
    """
    Engine for the given URL, with the artifacts table in place if the database can be reached.

    A database that cannot be opened does not stop the service: every write then reports a CacheError
    and images are served without being cached.
    """
    engine = create_engine(database_url)
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.warning("Artifact database %r not available, images will not be cached: %s", database_url, e)
    return engine


class SQLArtifactStore:
    """One row per cache key. Every call opens its own session, so a single store can serve concurrent requests."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.sessions = sessionmaker(bind=engine)

    def read(self, key: CacheKey) -> bytes | None:
        with self.sessions() as db:
            artifact = self._fetch_artifact(db, key)
            return artifact.data if artifact else None

    def write(self, key: CacheKey, data: bytes) -> str:
        location = f"{self.engine.url.render_as_string(hide_password=True)}#{DBArtifact.__tablename__}/{key}"
        try:
            with self.sessions() as db:
                if self._fetch_artifact(db, key) is not None:
                    return location
                db.add(DBArtifact(key=key, data=data))
                db.commit()
        except IntegrityError:
            # another request stored the same key in the meantime. Same request, same bytes.
            return location
        except SQLAlchemyError as e:
            raise CacheError(f"Could not store artifact {key!r}: {e}") from e
        return location

    def _fetch_artifact(self, db: Session, key: CacheKey) -> DBArtifact | None:
        query = select(DBArtifact).where(DBArtifact.key == key)
        return db.scalar(query)
