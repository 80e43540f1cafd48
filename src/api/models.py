"""Requests and Response models"""

import re
from typing import Any

from pydantic import BaseModel, ValidationInfo, field_validator

from src.core.config import RenderConfig
from src.services.render_service import RenderRequest

TRUTHY = {"1", "true", "on", "yes"}
_TAG_PATTERN = re.compile(r"<[^>]*>?")
_INT_PATTERN = re.compile(r"[+-]?\d+")


def _config(info: ValidationInfo) -> RenderConfig:
    """Bounds come from the config passed as validation context, ex. model_validate(data, context={"config": cfg})"""
    context = info.context or {}
    return context.get("config") or RenderConfig()


# --- REQUEST MODELS ---
class BoardImageRequest(BaseModel):
    """
    Query parameters of a board image request.

    Sanitizing never fails: unusable values fall back to their defaults, so every request gets an image.
    """

    fen: str = ""
    size: int | None = None
    reversed: bool = False
    download: bool = False

    @field_validator("fen", mode="before")
    @classmethod
    def sanitize_fen(cls, value: Any) -> str:
        if value is None:
            return ""
        text = _TAG_PATTERN.sub("", str(value))
        # strip control characters and everything outside of ASCII
        return "".join(character for character in text if 32 <= ord(character) <= 126)

    @field_validator("size", mode="before")
    @classmethod
    def validate_size(cls, value: Any, info: ValidationInfo) -> int:
        """Integer within the configured bounds, otherwise the default size (no clamping)."""
        config = _config(info)
        if isinstance(value, bool):
            return config.default_size
        if isinstance(value, int):
            size = value
        elif isinstance(value, str) and _INT_PATTERN.fullmatch(value.strip()):
            size = int(value.strip())
        else:
            return config.default_size

        if not (config.min_size <= size <= config.max_size):
            return config.default_size
        return size

    @field_validator(*["reversed", "download"], mode="before")
    @classmethod
    def lenient_flag(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() in TRUTHY

    def to_render_request(self, config: RenderConfig) -> RenderRequest:
        size = self.size if self.size is not None else config.default_size
        return RenderRequest(fen=self.fen, size=size, reversed=self.reversed)


# --- RESPONSE MODELS ---
class HealthResponse(BaseModel):
    status: str
