# fontmatch/core/validate.py
"""
Validate render settings and match configuration before a run.
Raises InvalidConfiguration; check_match_config returns (ok, message) for the UI.
"""

from __future__ import annotations

import math

from fontmatch.core.config import FONT_WEIGHTS, TEXT_TRANSFORMS
from fontmatch.core.error_codes import InvalidConfiguration
from fontmatch.core.types import MatchConfig, RenderSettings


def _require_positive(name: str, value: float) -> None:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"{name} must be a number, got {value!r}.") from None
    if not math.isfinite(v) or v <= 0:
        raise InvalidConfiguration(f"{name} must be positive, got {value!r}.")


def _require_finite(name: str, value: float) -> None:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"{name} must be a number, got {value!r}.") from None
    if not math.isfinite(v):
        raise InvalidConfiguration(f"{name} must be finite, got {value!r}.")


def validate_render_settings(settings: RenderSettings) -> None:
    """Reject settings the rasterizer cannot honour."""
    if not (settings.font_family or "").strip():
        raise InvalidConfiguration("Font family cannot be empty.")
    _require_positive("Font size", settings.font_size)
    _require_positive("Line height", settings.line_height)
    if settings.font_weight not in FONT_WEIGHTS:
        raise InvalidConfiguration(
            f"Font weight must be one of {', '.join(str(w) for w in FONT_WEIGHTS)}; got {settings.font_weight!r}."
        )
    if settings.text_transform not in TEXT_TRANSFORMS:
        raise InvalidConfiguration(
            f"Text transform must be one of {', '.join(TEXT_TRANSFORMS)}; got {settings.text_transform!r}."
        )
    _require_finite("Letter spacing", settings.letter_spacing)
    _require_finite("Word spacing", settings.word_spacing)


def validate_match_config(config: MatchConfig) -> None:
    """Validate both renderings of a job and its text."""
    if not (config.text or "").strip():
        raise InvalidConfiguration("Text cannot be empty.")
    validate_render_settings(config.webfont_settings())
    validate_render_settings(config.fallback_settings())


def check_match_config(config: MatchConfig) -> tuple[bool, str]:
    """Returns (ok, error_message)."""
    try:
        validate_match_config(config)
    except InvalidConfiguration as e:
        return False, str(e)
    return True, ""
