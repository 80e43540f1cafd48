"""Unit tests for src/api/models.py"""

from typing import Any

import pytest

from src.api.models import BoardImageRequest
from src.core.config import RenderConfig
from src.services.render_service import RenderRequest


def validate(params: dict[str, Any], config: RenderConfig | None = None) -> BoardImageRequest:
    return BoardImageRequest.model_validate(params, context={"config": config or RenderConfig()})


def test_defaults() -> None:
    request = validate({})
    assert request.fen == ""
    assert request.reversed is False
    assert request.download is False
    assert request.to_render_request(RenderConfig()) == RenderRequest("", 200, False)


@pytest.mark.parametrize(
    "raw, expected",
    [("100", 100), ("350", 350), ("1000", 1000), (" 420 ", 420), (512, 512)],
)
def test_valid_size(raw: Any, expected: int) -> None:
    assert validate({"size": raw}).size == expected


@pytest.mark.parametrize(
    "raw",
    ["99", "1001", "-200", "0", "abc", "12.5", "", "2e2", True],
)
def test_unusable_size_falls_back_to_default(raw: Any) -> None:
    """Out of range is not clamped: the default size is used instead"""
    assert validate({"size": raw}).size == 200


def test_size_bounds_come_from_config() -> None:
    config = RenderConfig(default_size=160, min_size=80, max_size=400)
    assert validate({"size": "80"}, config).size == 80
    assert validate({"size": "500"}, config).size == 160
    assert validate({}, config).to_render_request(config).size == 160


@pytest.mark.parametrize("raw", ["1", "true", "TRUE", "on", "yes", True])
def test_truthy_flags(raw: Any) -> None:
    request = validate({"reversed": raw, "download": raw})
    assert request.reversed is True
    assert request.download is True


@pytest.mark.parametrize("raw", ["0", "false", "off", "no", "", "maybe", False])
def test_falsy_flags(raw: Any) -> None:
    request = validate({"reversed": raw, "download": raw})
    assert request.reversed is False
    assert request.download is False


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"),
        ("<b>8</b>/8", "8/8"),
        ("8/8\n\t/8", "8/8/8"),
        ("K7/ÄÖ/8", "K7//8"),
    ],
)
def test_fen_is_sanitized(raw: str, expected: str) -> None:
    assert validate({"fen": raw}).fen == expected


def test_without_context_uses_default_config() -> None:
    assert BoardImageRequest.model_validate({"size": "5000"}).size == 200
