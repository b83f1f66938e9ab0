# tests/test_text_metrics.py
"""
Text transform and line wrapping with a fake 1 px-per-character measure;
spacing-aware measurement with a real font.
"""

from __future__ import annotations

import pytest

from fontmatch.core.fonts import load_font
from fontmatch.core.text_metrics import measure_text, transform_text, wrap_text


def _len_measure(s: str) -> float:
    return float(len(s))


@pytest.mark.parametrize(
    "transform, expected",
    [("none", "Hello World"), ("uppercase", "HELLO WORLD"), ("lowercase", "hello world")],
)
def test_transform_text(transform: str, expected: str) -> None:
    assert transform_text("Hello World", transform) == expected


def test_wrap_breaks_at_last_space() -> None:
    assert wrap_text("aaa bbb ccc ddd", 10, _len_measure) == ["aaa bbb", " ccc ddd"]


def test_wrap_keeps_short_lines_and_newlines() -> None:
    assert wrap_text("ab\ncd", 10, _len_measure) == ["ab", "cd"]
    assert wrap_text("ab\n\ncd", 10, _len_measure) == ["ab", "", "cd"]


def test_wrap_cuts_overlong_word() -> None:
    assert wrap_text("abcdefghijklmnop", 5, _len_measure) == ["abcd", "efgh", "ijkl", "mnop"]


def test_wrap_lines_fit_box() -> None:
    text = "the quick brown fox jumps over the lazy dog " * 5
    for line in wrap_text(text, 20, _len_measure):
        assert len(line.strip()) <= 20


def test_measure_text_adds_spacing() -> None:
    font = load_font("DejaVu Sans", 20)
    base = measure_text("a b", font)
    assert base == pytest.approx(font.getlength("a b"))
    assert measure_text("a b", font, letter_spacing=1.0, word_spacing=2.0) == pytest.approx(base + 3.0 + 2.0)
    assert measure_text("", font, letter_spacing=5.0) == 0.0
