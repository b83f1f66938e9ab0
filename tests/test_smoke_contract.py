# tests/test_smoke_contract.py
"""
Validate MatchResult serializes to the match.json shape; required keys exist.
Smoke test: match a font against itself end to end and write a report.
Uses DejaVu Sans (bundled with matplotlib), so no system fonts are needed.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

import numpy as np
import pytest

from fontmatch.core.error_codes import RenderFailure
from fontmatch.core.fonts import clear_registered_fonts, register_font_file
from fontmatch.core.formatting import format_done, format_progress, format_px
from fontmatch.core.reporting import match_to_dict, write_match_report
from fontmatch.core.runner import main
from fontmatch.core.session import match_fonts
from fontmatch.core.types import MatchConfig, MatchResult, OptimizationResult, SearchPoint


def _minimal_match_result() -> MatchResult:
    """Minimal valid result for schema contract tests."""
    img = np.full((4, 4, 4), 255, dtype=np.uint8)
    return MatchResult(
        config=MatchConfig(text="X", webfont_family="Georgia", fallback_family="Times New Roman"),
        reference_image=img,
        optimization=OptimizationResult(point=SearchPoint(0.8, -0.4), rounds=7, score=12),
    )


REQUIRED_KEYS = [
    "schema_version",
    "text",
    ("settings", "font_size_px"),
    ("settings", "line_height"),
    ("settings", "font_weight"),
    ("settings", "text_transform"),
    ("webfont", "font_family"),
    ("fallback", "font_family"),
    ("result", "letter_spacing_px"),
    ("result", "word_spacing_px"),
    ("result", "css"),
    ("result", "rounds"),
    ("result", "score"),
    ("result", "cancelled"),
    ("result", "message"),
    "history",
]


def test_match_schema_required_keys_exist() -> None:
    data = match_to_dict(_minimal_match_result())
    for key in REQUIRED_KEYS:
        if isinstance(key, tuple):
            obj = data
            for k in key:
                assert k in obj, f"Missing key: {key}"
                obj = obj[k]
        else:
            assert key in data, f"Missing key: {key}"


def test_match_json_roundtrip() -> None:
    result = _minimal_match_result()
    loaded = json.loads(json.dumps(match_to_dict(result)))
    assert loaded["schema_version"] == "1.0"
    assert loaded["result"]["css"] == {"letterSpacing": "0.8px", "wordSpacing": "-0.4px"}
    assert loaded["result"]["message"] == 'Done on Minimization Round 7\n{"letterSpacing":"0.8px","wordSpacing":"-0.4px"}'
    assert loaded["result"]["search_bound_px"] == pytest.approx(4.0)


@pytest.mark.parametrize(
    "value, expected",
    [(0, "0px"), (-0.0, "0px"), (4.0, "4px"), (0.8, "0.8px"), (-1.25, "-1.25px")],
)
def test_format_px(value: float, expected: str) -> None:
    assert format_px(value) == expected


def test_progress_and_done_messages() -> None:
    assert format_progress(3, 0.0, 1.6) == 'In Progress: Minimization Round 3\n{"letterSpacing":"0px","wordSpacing":"1.6px"}'
    assert format_done(12, 0.0, 1.6) == 'Done on Minimization Round 12\n{"letterSpacing":"0px","wordSpacing":"1.6px"}'


@pytest.fixture(scope="module")
def self_match() -> MatchResult:
    config = MatchConfig(text="Hello world", webfont_family="DejaVu Sans", fallback_family="DejaVu Sans")
    return match_fonts(config)


def test_self_match_converges_to_zero_mismatch(self_match: MatchResult) -> None:
    opt = self_match.optimization
    assert opt.score == 0
    assert opt.history[0].score == 0
    assert opt.history[0].moved is False
    # Shifts of half a pixel or more are always visible, so the origin holds while steps are large.
    assert all(r.step_x < 0.5 for r in opt.history if r.moved)
    # Below a quarter pixel a shift can stay under the threshold and tie with the center.
    assert abs(opt.point.x) < 0.25
    assert abs(opt.point.y) < 0.25
    assert not opt.cancelled
    assert re.fullmatch(
        r'Done on Minimization Round \d+\n\{"letterSpacing":"-?[\d.]+px","wordSpacing":"-?[\d.]+px"\}',
        self_match.message,
    )


def test_self_match_writes_report(self_match: MatchResult, tmp_path) -> None:
    paths = write_match_report(tmp_path, "smoke", self_match)
    names = {p.name for p in paths}
    assert {"match.json", "run_metadata.json", "reference.png", "diff.png", "comparison.png"} <= names
    for p in paths:
        assert p.exists()
    data = json.loads((tmp_path / "reports" / "smoke" / "match.json").read_text(encoding="utf-8"))
    assert data["result"]["message"] == self_match.message


def test_runner_rejects_invalid_font_size(capsys) -> None:
    code = main(["--webfont", "DejaVu Sans", "--fallback", "DejaVu Sans", "--font-size", "-1", "--no-report"])
    assert code == 1
    assert "Invalid settings" in capsys.readouterr().err


@pytest.fixture
def garbage_font(tmp_path: Path):
    """A registered family whose file is not a font."""
    path = tmp_path / "Garbage.ttf"
    path.write_bytes(b"this is not a font file")
    clear_registered_fonts()
    yield path
    clear_registered_fonts()


def test_unreadable_font_raises_render_failure(garbage_font: Path) -> None:
    family = register_font_file(garbage_font)
    config = MatchConfig(text="Hello world", webfont_family=family, fallback_family="DejaVu Sans")
    with pytest.raises(RenderFailure):
        match_fonts(config)


def test_runner_reports_render_failure(garbage_font: Path, capsys) -> None:
    code = main(["--font-file", str(garbage_font), "--webfont", "Garbage", "--fallback", "DejaVu Sans",
                 "--text", "Hello", "--no-report", "--quiet"])
    assert code == 1
    assert "Could not render the text" in capsys.readouterr().err


class _CancelAfter:
    """Reports cancelled once is_set has been asked more than n times."""

    def __init__(self, n: int) -> None:
        self.n = n
        self.calls = 0

    def is_set(self) -> bool:
        self.calls += 1
        return self.calls > self.n


def test_cancelled_match_keeps_best_so_far() -> None:
    config = MatchConfig(text="Hello world", webfont_family="DejaVu Sans", fallback_family="DejaVu Serif")
    result = match_fonts(config, cancel=_CancelAfter(1))
    opt = result.optimization
    assert opt.cancelled is True
    assert opt.rounds == 1
    assert len(opt.history) == 1
    assert opt.point == opt.history[0].point
    assert result.comparison_image is not None
    assert result.message.startswith("Done on Minimization Round 1\n")
