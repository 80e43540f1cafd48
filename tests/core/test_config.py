"""Unit tests for src/core/config.py"""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from src.core.config import RenderConfig
from src.core.exceptions import ConfigError
from src.core.shared_types import CacheBackend


def test_defaults() -> None:
    config = RenderConfig()
    assert config.default_size == 200
    assert (config.min_size, config.max_size) == (100, 1000)
    assert config.dark_square_color == "#b5876b"
    assert config.light_square_color == "#f0dec7"
    assert config.cache_root == Path("./cache/")
    assert config.sprite_root == Path("./pieces/")
    assert config.compress_level == 9
    assert config.palette_colors == 8
    assert config.cache_backend == CacheBackend.FILE
    assert config.single_flight is False


def test_from_env() -> None:
    environ = {
        "FEN_RENDER_DEFAULT_SIZE": "256",
        "FEN_RENDER_CACHE_ROOT": "/var/cache/boards",
        "FEN_RENDER_DARK_SQUARE_COLOR": "#769656",
        "FEN_RENDER_CACHE_BACKEND": "SQL",
        "FEN_RENDER_SINGLE_FLIGHT": "true",
        "UNRELATED": "ignored",
    }
    config = RenderConfig.from_env(environ)
    assert config.default_size == 256
    assert config.cache_root == Path("/var/cache/boards")
    assert config.dark_square_color == "#769656"
    assert config.cache_backend == CacheBackend.SQL
    assert config.single_flight is True
    # untouched values keep their defaults
    assert config.light_square_color == "#f0dec7"


def test_from_empty_env() -> None:
    assert RenderConfig.from_env({}) == RenderConfig()


def test_config_is_immutable() -> None:
    with pytest.raises(FrozenInstanceError):
        RenderConfig().default_size = 300  # type: ignore[misc]


@pytest.mark.parametrize("color", ["brown", "#12345", "#gggggg", "", "#b5876b7"])
def test_invalid_square_color(color: str) -> None:
    with pytest.raises(ConfigError):
        RenderConfig(dark_square_color=color)
    with pytest.raises(ConfigError):
        RenderConfig(light_square_color=color)


def test_invalid_square_color_from_env() -> None:
    with pytest.raises(ConfigError):
        RenderConfig.from_env({"FEN_RENDER_LIGHT_SQUARE_COLOR": "not-a-color"})
