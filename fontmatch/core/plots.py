# fontmatch/core/plots.py
"""
Search plots: mismatch score and step size per round, and the path through the
(letter spacing, word spacing) plane. Saves under <report_dir>/plots/.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from fontmatch.core.types import RoundRecord


def _plots_dir(report_dir: Path) -> Path:
    plots_dir = report_dir / "plots"
    plots_dir.mkdir(parents=True, exist_ok=True)
    return plots_dir


def plot_score_trace(report_dir: Path, history: list[RoundRecord]) -> Path:
    """
    Mismatch score (left axis) and step sizes (right axis, log) per round.
    Saves to report_dir/plots/score_trace.png and returns the path.
    """
    out = _plots_dir(report_dir) / "score_trace.png"
    rounds = [r.round for r in history]

    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(rounds, [r.score for r in history], color="#c0392b", linewidth=1.5, label="mismatch")
    moved = [r for r in history if r.moved]
    if moved:
        ax.scatter([r.round for r in moved], [r.score for r in moved], s=10, color="#c0392b", zorder=3)
    ax.set_xlabel("Round")
    ax.set_ylabel("Mismatched pixels")

    ax2 = ax.twinx()
    ax2.plot(rounds, [r.step_x for r in history], color="#2980b9", linestyle="--", linewidth=1, label="step x")
    ax2.plot(rounds, [r.step_y for r in history], color="#27ae60", linestyle=":", linewidth=1, label="step y")
    ax2.set_yscale("log")
    ax2.set_ylabel("Step (px)")

    lines = ax.get_lines() + ax2.get_lines()
    ax.legend(lines, [ln.get_label() for ln in lines], loc="upper right", fontsize=8)
    ax.set_title("Score and step size by round")
    plt.tight_layout()
    fig.savefig(out, dpi=120)
    plt.close(fig)
    return out


def plot_trajectory(report_dir: Path, history: list[RoundRecord], bound: float) -> Path:
    """Points visited in the spacing plane with the ±bound search box."""
    out = _plots_dir(report_dir) / "trajectory.png"
    xs = [0.0] + [r.point.x for r in history]
    ys = [0.0] + [r.point.y for r in history]

    fig, ax = plt.subplots(figsize=(5, 5))
    ax.add_patch(Rectangle((-bound, -bound), 2 * bound, 2 * bound, fill=False, linestyle="--", edgecolor="gray"))
    ax.plot(xs, ys, marker="o", markersize=3, linewidth=1, color="#34495e")
    ax.scatter([xs[-1]], [ys[-1]], s=40, color="#c0392b", zorder=3, label="final")
    pad = bound * 0.1
    ax.set_xlim(-bound - pad, bound + pad)
    ax.set_ylim(-bound - pad, bound + pad)
    ax.set_aspect("equal", adjustable="box")
    ax.set_xlabel("Letter spacing (px)")
    ax.set_ylabel("Word spacing (px)")
    ax.set_title("Search path")
    ax.legend(loc="upper right", fontsize=8)
    plt.tight_layout()
    fig.savefig(out, dpi=120)
    plt.close(fig)
    return out
