# fontmatch/core/config.py
"""
Central configuration for fallback font matching.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Canvas -----
CANVAS_WIDTH_PX: int = 800
CANVAS_HEIGHT_PX: int = 1000

CANVAS_PADDING_X_PX: int = 20
CANVAS_PADDING_Y_PX: int = 20
"""Text is laid out inside the canvas minus this padding on each side."""

RENDER_SUPERSAMPLE: int = 4
"""Text is drawn at this multiple of the canvas size and box-filtered down, so glyphs land on
quarter-pixel positions instead of whole pixels."""

# ----- Colours -----
COLOR_WHITE: str = "#fff"
COLOR_BLACK: str = "#000"
COLOR_RED: str = "#ff0000"
BG_COLOR_FALLBACK: str = "#FFF9B3"
"""Background of fallback renderings. Visual only; stays under the diff threshold against BG_COLOR_WEBFONT."""
BG_COLOR_WEBFONT: str = "#B3FFCB"

# ----- Pixel diff -----
DIFF_THRESHOLD: float = 0.2
"""Perceptual threshold in [0, 1]; smaller is more sensitive."""

DIFF_INCLUDE_AA: bool = True
"""Count anti-aliased edge pixels as mismatches."""

DIFF_MAX_YIQ_DELTA: float = 35215.0
"""Largest possible weighted YIQ delta between two colours."""

DIFF_GRAY_ALPHA: float = 0.1
DIFF_COLOR: tuple[int, int, int] = (255, 0, 0)
DIFF_AA_COLOR: tuple[int, int, int] = (255, 255, 0)

# ----- Search -----
SEARCH_BOUND_FACTOR: float = 0.2
"""Letter and word spacing are searched within ±factor × font size."""

SEARCH_STEP_DIVISIONS: int = 10
"""Initial step = (2 × bound) / divisions."""

MIN_STEP_PX: float = 0.01
"""Search stops once either step drops to this resolution."""

STEP_DECAY_BASE: float = 0.999
"""After round r both steps are multiplied by base ** r."""

COORD_DECIMALS: int = 2
"""Candidate coordinates are rounded to hundredths of a px."""

PROGRESS_DELAY_S: float = 10 / 60
"""Pause after a progress report so an interactive UI can repaint (ten frames at 60 Hz)."""

MAX_WORKERS: int = max(1, int(os.environ.get("FONTMATCH_MAX_WORKERS", "1") or 1))
"""Threads used to evaluate the five neighbourhood candidates. 1 = sequential."""

# ----- Typography -----
FONT_WEIGHTS: tuple[int, ...] = (100, 200, 300, 400, 500, 600, 700, 800, 900)
TEXT_TRANSFORMS: tuple[str, ...] = ("none", "uppercase", "lowercase")

DEFAULT_FONT_FAMILY: str = "DejaVu Sans"
"""Substitute used when a family cannot be resolved; ships with matplotlib."""

DEFAULT_WEBFONT_FAMILY: str = "Georgia"
DEFAULT_FALLBACK_FAMILY: str = "Times New Roman"
DEFAULT_FONT_SIZE_PX: float = 20.0
DEFAULT_LINE_HEIGHT: float = 1.1
DEFAULT_FONT_WEIGHT: int = 400
DEFAULT_TEXT_TRANSFORM: str = "none"
DEFAULT_LETTER_SPACING_PX: float = 0.0
DEFAULT_WORD_SPACING_PX: float = 0.0

DEFAULT_TEXT: str = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, quis nostrud "
    "exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat. Duis aute irure "
    "dolor in reprehenderit in voluptate velit esse cillum dolore eu fugiat nulla pariatur. "
    "Excepteur sint occaecat cupidatat non proident, sunt in culpa qui officia deserunt "
    "mollit anim id est laborum."
)

# ----- Debug flags -----
SEARCH_DEBUG: bool = os.environ.get("FONTMATCH_DEBUG", "").lower() in ("1", "true", "yes")
"""Log every evaluated candidate. Set env FONTMATCH_DEBUG=1 to enable."""
