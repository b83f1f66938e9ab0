# fontmatch/core/formatting.py
"""
CSS px values and the progress / result strings shown to users.
Numbers follow JavaScript formatting: 0 -> '0px', 0.8 -> '0.8px'.
"""

from __future__ import annotations

import json


def format_px(value: float) -> str:
    v = float(value)
    if v == int(v):
        return f"{int(v)}px"
    return f"{v!r}px"


def spacing_css(x: float, y: float) -> dict[str, str]:
    """{'letterSpacing': ..., 'wordSpacing': ...} for a spacing pair."""
    return {"letterSpacing": format_px(x), "wordSpacing": format_px(y)}


def _spacing_json(x: float, y: float) -> str:
    return json.dumps(spacing_css(x, y), separators=(",", ":"))


def format_progress(round_no: int, x: float, y: float) -> str:
    return f"In Progress: Minimization Round {round_no}\n{_spacing_json(x, y)}"


def format_done(rounds: int, x: float, y: float) -> str:
    return f"Done on Minimization Round {rounds}\n{_spacing_json(x, y)}"
