# fontmatch/core/text_metrics.py
"""
Text transform, width measurement with CSS letter/word spacing, and greedy line wrapping
for the fixed text box. Widths in px.
"""

from __future__ import annotations

from typing import Callable

from PIL import ImageFont


def transform_text(text: str, transform: str) -> str:
    """Apply a CSS-like text-transform before measuring and painting."""
    if transform == "uppercase":
        return text.upper()
    if transform == "lowercase":
        return text.lower()
    return text


def measure_text(
    text: str,
    font: ImageFont.FreeTypeFont,
    letter_spacing: float = 0.0,
    word_spacing: float = 0.0,
) -> float:
    """
    Advance width of text. Letter spacing follows every character (including the last),
    word spacing is added to every space.
    """
    if not text:
        return 0.0
    return float(font.getlength(text)) + len(text) * letter_spacing + text.count(" ") * word_spacing


def wrap_text(text: str, max_width: float, measure: Callable[[str], float]) -> list[str]:
    """
    Split text into lines no wider than max_width.
    Explicit newlines are kept. An overlong line is cut at its longest fitting prefix,
    moved back to the last space; a single word wider than the box is cut mid-word.
    Continuation lines keep their leading space; callers strip when drawing.
    """
    lines: list[str] = []
    for paragraph in text.split("\n"):
        if measure(paragraph) <= max_width:
            lines.append(paragraph)
            continue
        rest = paragraph
        while measure(rest) > max_width:
            fit = 0
            while fit < len(rest) and measure(rest[: fit + 1]) < max_width:
                fit += 1
            cut = fit
            if rest[cut:cut + 1] != " ":
                while cut > 0 and rest[cut] != " ":
                    cut -= 1
                if cut == 0:
                    cut = fit
            cut = max(cut, 1)
            lines.append(rest[:cut])
            rest = rest[cut:]
        if measure(rest) > 0:
            lines.append(rest)
    return lines
