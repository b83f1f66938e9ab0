# fontmatch/core/reporting.py
"""
Create reports/<run_name>/ and write match.json, run_metadata.json and the PNG images
(reference, best diff, comparison overlay).
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from fontmatch.core.config import (
    CANVAS_HEIGHT_PX,
    CANVAS_WIDTH_PX,
    DIFF_INCLUDE_AA,
    DIFF_THRESHOLD,
    MIN_STEP_PX,
    REPORTS_DIR,
    SEARCH_BOUND_FACTOR,
    SEARCH_STEP_DIVISIONS,
    STEP_DECAY_BASE,
)
from fontmatch.core.optimizer import search_bound
from fontmatch.core.render import save_png
from fontmatch.core.types import MatchResult

SCHEMA_VERSION = "1.0"


def match_to_dict(result: MatchResult) -> dict:
    """Exact structure for match.json."""
    cfg = result.config
    opt = result.optimization
    return {
        "schema_version": SCHEMA_VERSION,
        "text": cfg.text,
        "settings": {
            "font_size_px": cfg.font_size,
            "line_height": cfg.line_height,
            "font_weight": cfg.font_weight,
            "text_transform": cfg.text_transform,
        },
        "webfont": {
            "font_family": cfg.webfont_family,
            "letter_spacing_px": cfg.letter_spacing,
            "word_spacing_px": cfg.word_spacing,
        },
        "fallback": {
            "font_family": cfg.fallback_family,
        },
        "result": {
            "letter_spacing_px": opt.point.x,
            "word_spacing_px": opt.point.y,
            "css": opt.point.as_css(),
            "rounds": opt.rounds,
            "score": opt.score,
            "cancelled": opt.cancelled,
            "search_bound_px": search_bound(cfg.font_size),
            "message": result.message,
        },
        "history": [
            {
                "round": r.round,
                "letter_spacing_px": r.point.x,
                "word_spacing_px": r.point.y,
                "score": r.score,
                "step_x": r.step_x,
                "step_y": r.step_y,
                "moved": r.moved,
            }
            for r in opt.history
        ],
    }


def run_metadata_dict(run_name: str, result: MatchResult) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "match_config": asdict(result.config),
        "config": {
            "CANVAS_WIDTH_PX": CANVAS_WIDTH_PX,
            "CANVAS_HEIGHT_PX": CANVAS_HEIGHT_PX,
            "DIFF_THRESHOLD": DIFF_THRESHOLD,
            "DIFF_INCLUDE_AA": DIFF_INCLUDE_AA,
            "SEARCH_BOUND_FACTOR": SEARCH_BOUND_FACTOR,
            "SEARCH_STEP_DIVISIONS": SEARCH_STEP_DIVISIONS,
            "MIN_STEP_PX": MIN_STEP_PX,
            "STEP_DECAY_BASE": STEP_DECAY_BASE,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_match_json(report_dir: Path, result: MatchResult) -> Path:
    """Write match.json to report_dir. Returns path to file."""
    path = report_dir / "match.json"
    path.write_text(json.dumps(match_to_dict(result), indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(report_dir: Path, run_name: str, result: MatchResult) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    path.write_text(json.dumps(run_metadata_dict(run_name, result), indent=2), encoding="utf-8")
    return path


def write_match_images(report_dir: Path, result: MatchResult) -> list[Path]:
    """reference.png, diff.png (best candidate) and comparison.png, when available."""
    paths = [save_png(result.reference_image, report_dir / "reference.png")]
    if result.optimization.diff_image is not None:
        paths.append(save_png(result.optimization.diff_image, report_dir / "diff.png"))
    if result.comparison_image is not None:
        paths.append(save_png(result.comparison_image, report_dir / "comparison.png"))
    return paths


def write_match_report(repo_root: Path, run_name: str, result: MatchResult, output_dir: str | None = None) -> list[Path]:
    """Everything for one run: json, metadata, images and plots. Returns written paths."""
    from fontmatch.core.plots import plot_score_trace, plot_trajectory

    report_dir = ensure_report_dir(repo_root, run_name, output_dir=output_dir)
    paths = [
        write_match_json(report_dir, result),
        write_run_metadata_json(report_dir, run_name, result),
    ]
    paths.extend(write_match_images(report_dir, result))
    if result.optimization.history:
        paths.append(plot_score_trace(report_dir, result.optimization.history))
        paths.append(plot_trajectory(report_dir, result.optimization.history, search_bound(result.config.font_size)))
    return paths
