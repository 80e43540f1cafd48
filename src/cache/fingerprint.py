"""
Derive the cache key of a render request.

The key doubles as the file name of the cached image. We hash the (filtered) request instead of using it directly,
which avoids issues with case-insensitive file systems ('K' vs 'k') and characters that are not safe in a path.

NOTE: the filter also throws away the rank separators, so two placements that only differ in where a '/' sits
share a key even when the parser draws them differently (ex. '1/p' and '1p').
Existing caches depend on these keys, so this is kept as is.
"""

import hashlib
import re
from typing import NewType

CacheKey = NewType("CacheKey", str)

SEPARATOR = "_"
IMAGE_EXTENSION = "png"
_STRIP_PATTERN = re.compile(r"[^kqrnbpKQRNBP_0-9\-]+")


def canonicalize(fen: str, size: int, reversed: bool) -> str:
    """Join the request fields and strip every character that is not a piece letter, digit, '_' or '-'."""
    name = SEPARATOR.join([fen, str(size), "1" if reversed else ""])
    return _STRIP_PATTERN.sub("", name)


def fingerprint(
    fen: str, size: int, reversed: bool, extension: str = IMAGE_EXTENSION
) -> CacheKey:
    """md5 hex digest of the canonical request + the image extension, ex. '3f2a...9c.png'"""
    # md5 is used for spreading keys, not for security
    digest = hashlib.md5(
        canonicalize(fen, size, reversed).encode("utf-8"), usedforsecurity=False
    ).hexdigest()
    return CacheKey(f"{digest}.{extension}")
