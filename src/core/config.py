"""
Process wide configuration.

One RenderConfig is built at startup (usually through `RenderConfig.from_env`) and handed to every layer that needs it.
Nothing in the code base reads these values from module globals.
"""

import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Self

from src.core.exceptions import ConfigError
from src.core.shared_types import CacheBackend

ENV_PREFIX = "FEN_RENDER_"
_HEX_COLOR_PATTERN = re.compile(r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


@dataclass(frozen=True)
class RenderConfig:
    # board size in pixels, as accepted from the client
    default_size: int = 200
    min_size: int = 100
    max_size: int = 1000

    dark_square_color: str = "#b5876b"
    light_square_color: str = "#f0dec7"

    cache_root: Path = Path("./cache/")
    sprite_root: Path = Path("./pieces/")
    image_extension: str = "png"

    # PNG output: zlib level 0-9 and the number of palette colors the image is reduced to before encoding
    compress_level: int = 9
    palette_colors: int = 8

    cache_backend: CacheBackend = CacheBackend.FILE
    database_url: str = "sqlite:///./cache/artifacts.db"

    single_flight: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        # fail at startup rather than on the first request that draws a board
        for name in ("dark_square_color", "light_square_color"):
            if not _HEX_COLOR_PATTERN.fullmatch(getattr(self, name)):
                raise ConfigError(f"{name} must be a hex color like '#b5876b', got {getattr(self, name)!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Override defaults with FEN_RENDER_<FIELD NAME> variables, ex. FEN_RENDER_CACHE_ROOT=/var/cache/boards"""
        environ = os.environ if environ is None else environ
        overrides = {}
        for config_field in fields(cls):
            raw = environ.get(ENV_PREFIX + config_field.name.upper())
            if raw is None:
                continue
            overrides[config_field.name] = _convert(config_field.name, raw)
        return cls(**overrides)


def _convert(name: str, raw: str) -> object:
    """Cast the raw environment string to the type of the field with the given name."""
    default = getattr(RenderConfig, name)
    if isinstance(default, bool):
        return raw.strip().lower() in {"1", "true", "on", "yes"}
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, Path):
        return Path(raw)
    if isinstance(default, CacheBackend):
        return CacheBackend(raw.strip().lower())
    return raw
