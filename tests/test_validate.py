# tests/test_validate.py
"""
Deterministic tests for render settings and match configuration validation.
"""

from __future__ import annotations

import math

import pytest

from fontmatch.core.error_codes import InvalidConfiguration, user_message
from fontmatch.core.types import MatchConfig, RenderSettings
from fontmatch.core.validate import check_match_config, validate_match_config, validate_render_settings


def _config(**overrides) -> MatchConfig:
    base = dict(text="Hello world", webfont_family="DejaVu Sans", fallback_family="DejaVu Serif")
    base.update(overrides)
    return MatchConfig(**base)


def test_valid_settings_pass() -> None:
    validate_render_settings(RenderSettings("DejaVu Sans", 20, 1.1, 700, "uppercase", -0.5, 2.0))
    validate_match_config(_config())


@pytest.mark.parametrize(
    "settings",
    [
        RenderSettings("", 20, 1.1),
        RenderSettings("   ", 20, 1.1),
        RenderSettings("DejaVu Sans", 0, 1.1),
        RenderSettings("DejaVu Sans", -4, 1.1),
        RenderSettings("DejaVu Sans", math.nan, 1.1),
        RenderSettings("DejaVu Sans", 20, 0),
        RenderSettings("DejaVu Sans", 20, 1.1, font_weight=450),
        RenderSettings("DejaVu Sans", 20, 1.1, text_transform="capitalize"),  # type: ignore[arg-type]
        RenderSettings("DejaVu Sans", 20, 1.1, letter_spacing=math.inf),
    ],
)
def test_invalid_settings_raise(settings: RenderSettings) -> None:
    with pytest.raises(InvalidConfiguration):
        validate_render_settings(settings)


def test_empty_text_rejected() -> None:
    with pytest.raises(InvalidConfiguration, match="Text"):
        validate_match_config(_config(text="  \n"))


def test_invalid_configuration_is_value_error() -> None:
    with pytest.raises(ValueError):
        validate_match_config(_config(font_size=-1))


def test_check_match_config_returns_tuple() -> None:
    assert check_match_config(_config()) == (True, "")
    ok, msg = check_match_config(_config(fallback_family=""))
    assert ok is False
    assert "Font family" in msg


def test_error_key_maps_to_user_message() -> None:
    err = InvalidConfiguration("x")
    assert err.error_key == "invalid_configuration"
    assert user_message(err.error_key)
