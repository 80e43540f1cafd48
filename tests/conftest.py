"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from pathlib import Path
from typing import Generator

import pytest
from PIL import Image
from sqlalchemy import Engine, StaticPool, create_engine

from src.board.pieces import PIECE_CHARACTERS, Piece
from src.cache.schema import Base
from src.core.config import RenderConfig
from src.core.shared_types import Color

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"

# sprites are solid squares, so their color can be checked in the middle of a square on the rendered board
LIGHT_SPRITE_COLOR = (255, 255, 255, 255)
DARK_SPRITE_COLOR = (0, 0, 0, 255)
SPRITE_SIZE = 45


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    """Connection to a test database. Tables are removed at teardown to make tests independent of each other."""
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def sprite_root(tmp_path: Path) -> Path:
    """Directory with a sprite for all 12 pieces"""
    root = tmp_path / "pieces"
    root.mkdir()
    for character in PIECE_CHARACTERS:
        piece = Piece.from_fen(character)
        color = LIGHT_SPRITE_COLOR if piece.color == Color.LIGHT else DARK_SPRITE_COLOR
        Image.new("RGBA", (SPRITE_SIZE, SPRITE_SIZE), color).save(
            root / f"{piece.sprite_name()}.png"
        )
    return root


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    root = tmp_path / "cache"
    root.mkdir()
    return root


@pytest.fixture
def config(sprite_root: Path, cache_root: Path) -> RenderConfig:
    return RenderConfig(sprite_root=sprite_root, cache_root=cache_root)
