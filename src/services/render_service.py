"""
Orchestration of a board image request: fingerprint -> cache lookup -> (parse -> draw -> place pieces -> encode -> store).

The only error that leaves this layer is RenderingUnavailableError. Bad FEN strings, missing sprites and a cache that
cannot be read or written all still result in an image.
"""

import io
import logging
import threading
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from PIL import Image

from src.board.fen import parse_placement
from src.cache.artifact_cache import ArtifactCache
from src.cache.fingerprint import CacheKey, fingerprint
from src.core.config import RenderConfig
from src.core.exceptions import RenderingUnavailableError
from src.rendering.board_renderer import create_canvas, draw_board
from src.rendering.compositor import place_pieces
from src.rendering.sprites import SpriteSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderRequest:
    """Already sanitized by the API layer. size is only assumed to be a positive integer here."""

    fen: str = ""
    size: int = 200
    reversed: bool = False


@dataclass(frozen=True)
class RenderResult:
    key: CacheKey
    data: bytes
    cache_hit: bool
    location: Optional[str]


class InFlightRenders:
    """
    Per cache key lock, so concurrent identical requests render once.

    Entries only live while someone holds or waits for them.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[CacheKey, tuple[threading.Lock, int]] = {}

    @contextmanager
    def hold(self, key: CacheKey) -> Iterator[None]:
        with self._guard:
            lock, waiters = self._locks.get(key, (threading.Lock(), 0))
            self._locks[key] = (lock, waiters + 1)
        try:
            with lock:
                yield
        finally:
            with self._guard:
                lock, waiters = self._locks[key]
                if waiters == 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, waiters - 1)

    def __len__(self) -> int:
        return len(self._locks)


def encode_png(image: Image.Image, palette_colors: int, compress_level: int) -> bytes:
    """Reduce to a small palette (keeps the files tiny) and write as PNG."""
    try:
        with image.quantize(colors=palette_colors) as paletted:
            buffer = io.BytesIO()
            paletted.save(buffer, format="PNG", compress_level=compress_level)
    except (OSError, ValueError) as e:
        logger.error("Encoding the board image failed: %s", e)
        raise RenderingUnavailableError("Could not encode the board image") from e
    return buffer.getvalue()


class RenderService:
    """Orchestration of cache and rendering for board images."""

    def __init__(self, config: RenderConfig, cache: ArtifactCache) -> None:
        self.config = config
        self.cache = cache
        self.in_flight = InFlightRenders() if config.single_flight else None

    def render(self, request: RenderRequest) -> RenderResult:
        """Image for the request, from the cache if we have drawn it before."""
        key = fingerprint(
            request.fen, request.size, request.reversed, self.config.image_extension
        )

        cached = self.cache.get(key)
        if cached is not None:
            return RenderResult(key, cached, cache_hit=True, location=None)

        if self.in_flight is None:
            return self._render_and_store(key, request)

        with self.in_flight.hold(key):
            # someone else may have finished the same render while we were waiting
            cached = self.cache.get(key)
            if cached is not None:
                return RenderResult(key, cached, cache_hit=True, location=None)
            return self._render_and_store(key, request)

    def draw(self, request: RenderRequest) -> bytes:
        """Parse, draw, place pieces and encode. No caching involved."""
        board = parse_placement(request.fen)
        with ExitStack() as resources:
            canvas = resources.enter_context(create_canvas(request.size))
            sprites = resources.enter_context(
                SpriteSet.load(
                    board, self.config.sprite_root, self.config.image_extension
                )
            )
            draw_board(
                canvas,
                dark_color=self.config.dark_square_color,
                light_color=self.config.light_square_color,
            )
            place_pieces(canvas, board, request.reversed, sprites)
            return encode_png(
                canvas, self.config.palette_colors, self.config.compress_level
            )

    def _render_and_store(self, key: CacheKey, request: RenderRequest) -> RenderResult:
        data = self.draw(request)
        artifact = self.cache.put(key, data)
        # serve what we just encoded, whether or not it made it into the cache
        return RenderResult(key, artifact.data, cache_hit=False, location=artifact.location)
