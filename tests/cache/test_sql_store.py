"""Unit tests for src/cache/sql_store.py"""

from pathlib import Path

import pytest
from sqlalchemy import Engine, create_engine, select
from sqlalchemy.orm import Session

from src.cache.fingerprint import fingerprint
from src.cache.schema import DBArtifact
from src.cache.sql_store import SQLArtifactStore, create_store_engine
from src.core.exceptions import CacheError

KEY = fingerprint("8/8/8/8/8/8/8/8", 200, False)


def test_write_then_read(db_engine: Engine) -> None:
    store = SQLArtifactStore(db_engine)
    location = store.write(KEY, b"png bytes")
    assert location.endswith(f"artifacts/{KEY}")
    assert store.read(KEY) == b"png bytes"


def test_read_unknown_key(db_engine: Engine) -> None:
    store = SQLArtifactStore(db_engine)
    assert store.read(KEY) is None


def test_one_row_per_key(db_engine: Engine) -> None:
    """Second write for the same key keeps the first artifact"""
    store = SQLArtifactStore(db_engine)
    store.write(KEY, b"first")
    store.write(KEY, b"second")

    with Session(db_engine) as db:
        rows = db.scalars(select(DBArtifact)).all()
        assert len(rows) == 1
        assert rows[0].data == b"first"
        assert rows[0].created_at is not None


def test_missing_table() -> None:
    """Without the table, writing is reported as a CacheError"""
    engine = create_engine("sqlite:///:memory:")
    store = SQLArtifactStore(engine)
    with pytest.raises(CacheError):
        store.write(KEY, b"png bytes")


def test_create_store_engine_creates_table() -> None:
    engine = create_store_engine("sqlite:///:memory:")
    store = SQLArtifactStore(engine)
    store.write(KEY, b"png bytes")
    assert store.read(KEY) == b"png bytes"


def test_unopenable_database(tmp_path: Path) -> None:
    """Engine is still handed out, writes report a CacheError"""
    engine = create_store_engine(f"sqlite:///{tmp_path}/missing/dir/artifacts.db")
    store = SQLArtifactStore(engine)
    with pytest.raises(CacheError):
        store.write(KEY, b"png bytes")
