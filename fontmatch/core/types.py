# fontmatch/core/types.py
"""
Dataclasses for render settings, search points, search state and results.
Schema of the serialized result lives in fontmatch/core/reporting.py.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal

import numpy as np

from fontmatch.core.formatting import format_done, format_progress, spacing_css

TextTransform = Literal["none", "uppercase", "lowercase"]

# RGBA, shape (height, width, 4), dtype uint8.
PixelImage = np.ndarray


@dataclass(frozen=True)
class RenderSettings:
    """Typography for one rasterization call. Spacing in px, line height unitless."""
    font_family: str
    font_size: float
    line_height: float
    font_weight: int = 400
    text_transform: TextTransform = "none"
    letter_spacing: float = 0.0
    word_spacing: float = 0.0

    @property
    def line_height_px(self) -> float:
        return self.line_height * self.font_size

    def with_spacing(self, letter_spacing: float, word_spacing: float) -> "RenderSettings":
        return replace(self, letter_spacing=letter_spacing, word_spacing=word_spacing)


@dataclass(frozen=True)
class SearchPoint:
    """x = letter spacing (px), y = word spacing (px)."""
    x: float
    y: float

    def as_css(self) -> dict[str, str]:
        return spacing_css(self.x, self.y)


@dataclass
class SearchState:
    """Mutable optimizer state, owned by one run."""
    current: SearchPoint
    step_x: float
    step_y: float
    round: int = 0


@dataclass(frozen=True)
class ScoredCandidate:
    point: SearchPoint
    score: int
    diff_image: PixelImage = field(repr=False, compare=False)


@dataclass(frozen=True)
class RoundRecord:
    """One optimizer iteration: the point chosen and the steps it was searched with."""
    round: int
    point: SearchPoint
    score: int
    step_x: float
    step_y: float
    moved: bool


@dataclass(frozen=True)
class ProgressReport:
    round: int
    point: SearchPoint
    score: int
    diff_image: PixelImage = field(repr=False, compare=False)

    @property
    def message(self) -> str:
        return format_progress(self.round, self.point.x, self.point.y)


@dataclass
class OptimizationResult:
    """Final point of a search. rounds counts completed iterations."""
    point: SearchPoint
    rounds: int
    score: int | None = None
    diff_image: PixelImage | None = field(default=None, repr=False)
    history: list[RoundRecord] = field(default_factory=list, repr=False)
    cancelled: bool = False


@dataclass(frozen=True)
class MatchConfig:
    """
    One matching job. letter_spacing / word_spacing are the offsets applied to the
    webfont reference rendering; the fallback spacing is what gets searched.
    """
    text: str
    webfont_family: str
    fallback_family: str
    font_size: float = 20.0
    line_height: float = 1.1
    font_weight: int = 400
    text_transform: TextTransform = "none"
    letter_spacing: float = 0.0
    word_spacing: float = 0.0

    def webfont_settings(self) -> RenderSettings:
        return RenderSettings(
            font_family=self.webfont_family,
            font_size=self.font_size,
            line_height=self.line_height,
            font_weight=self.font_weight,
            text_transform=self.text_transform,
            letter_spacing=self.letter_spacing,
            word_spacing=self.word_spacing,
        )

    def fallback_settings(self) -> RenderSettings:
        return RenderSettings(
            font_family=self.fallback_family,
            font_size=self.font_size,
            line_height=self.line_height,
            font_weight=self.font_weight,
            text_transform=self.text_transform,
        )


@dataclass
class MatchResult:
    config: MatchConfig
    reference_image: PixelImage = field(repr=False)
    optimization: OptimizationResult
    comparison_image: PixelImage | None = field(default=None, repr=False)

    @property
    def point(self) -> SearchPoint:
        return self.optimization.point

    @property
    def message(self) -> str:
        p = self.optimization.point
        return format_done(self.optimization.rounds, p.x, p.y)
