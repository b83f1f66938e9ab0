# fontmatch/core/optimizer.py
"""
Coordinate descent over (letter spacing, word spacing).

Each round scores a cross-shaped neighbourhood [north, west, center, east, south] around
the current point, moves to the lowest mismatch score (ties: earliest in that order) and
shrinks both steps by STEP_DECAY_BASE ** round. The search stops as soon as either step
reaches MIN_STEP_PX.
"""

from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Protocol, Sequence

from fontmatch.core.config import (
    COORD_DECIMALS,
    MAX_WORKERS,
    MIN_STEP_PX,
    SEARCH_BOUND_FACTOR,
    SEARCH_STEP_DIVISIONS,
    STEP_DECAY_BASE,
)
from fontmatch.core.evaluate import CandidateEvaluator
from fontmatch.core.types import (
    OptimizationResult,
    PixelImage,
    ProgressReport,
    RenderSettings,
    RoundRecord,
    ScoredCandidate,
    SearchPoint,
    SearchState,
)

logger = logging.getLogger(__name__)

ScoreBatch = Callable[[Sequence[SearchPoint]], Sequence[ScoredCandidate]]
ProgressCallback = Callable[[ProgressReport], None]


class CancelToken(Protocol):
    def is_set(self) -> bool: ...


def search_bound(font_size: float) -> float:
    """Spacing is searched within ±bound px on both axes."""
    return SEARCH_BOUND_FACTOR * float(font_size)


def initial_step(bound: float) -> float:
    return (2.0 * bound) / SEARCH_STEP_DIVISIONS


def step_after_rounds(initial: float, rounds: int) -> float:
    """Closed form of the step schedule: initial * base ** (1 + 2 + ... + rounds)."""
    return initial * STEP_DECAY_BASE ** (rounds * (rounds + 1) / 2)


def round_half_up(value: float, decimals: int = COORD_DECIMALS) -> float:
    """Round with halves going up (towards +inf), not to even."""
    scale = 10 ** decimals
    return math.floor(value * scale + 0.5) / scale


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def snap_point(x: float, y: float, bound: float) -> SearchPoint:
    """Clamp into [-bound, bound], round to hundredths, and keep the rounded value in bounds."""
    sx = clamp(round_half_up(clamp(x, -bound, bound)), -bound, bound)
    sy = clamp(round_half_up(clamp(y, -bound, bound)), -bound, bound)
    return SearchPoint(x=sx, y=sy)


def neighborhood(current: SearchPoint, step_x: float, step_y: float, bound: float) -> list[SearchPoint]:
    """Candidates in tie-break order: north, west, center, east, south."""
    cx, cy = current.x, current.y
    return [
        snap_point(cx, cy - step_y, bound),
        snap_point(cx - step_x, cy, bound),
        snap_point(cx, cy, bound),
        snap_point(cx + step_x, cy, bound),
        snap_point(cx, cy + step_y, bound),
    ]


def select_best(scored: Sequence[ScoredCandidate]) -> ScoredCandidate:
    """Strict minimum; the first candidate wins ties."""
    best = scored[0]
    for cand in scored[1:]:
        if cand.score < best.score:
            best = cand
    return best


def search(
    score_batch: ScoreBatch,
    bound: float,
    min_step: float = MIN_STEP_PX,
    on_progress: ProgressCallback | None = None,
    cancel: CancelToken | None = None,
    progress_delay: float = 0.0,
) -> OptimizationResult:
    """
    Run the descent from (0, 0) with any batch scorer.
    on_progress fires only when a round moves to a point of different value; the
    report carries the round number before it is incremented.
    """
    if bound <= 0:
        raise ValueError(f"Search bound must be positive, got {bound}")
    step = initial_step(bound)
    state = SearchState(current=SearchPoint(0.0, 0.0), step_x=step, step_y=step)
    history: list[RoundRecord] = []
    last: ScoredCandidate | None = None
    cancelled = False

    # Coupled guard: one axis can stop the other.
    while state.step_x > min_step and state.step_y > min_step:
        if cancel is not None and cancel.is_set():
            cancelled = True
            logger.info("Search cancelled at round %d, point %s", state.round, state.current)
            break
        points = neighborhood(state.current, state.step_x, state.step_y, bound)
        scored = list(score_batch(points))
        if len(scored) != len(points):
            raise ValueError(f"Scorer returned {len(scored)} results for {len(points)} points")
        chosen = select_best(scored)
        moved = chosen.point != state.current
        history.append(
            RoundRecord(
                round=state.round,
                point=chosen.point,
                score=chosen.score,
                step_x=state.step_x,
                step_y=state.step_y,
                moved=moved,
            )
        )
        logger.debug(
            "round %d: step=(%.4f, %.4f) point=(%s, %s) score=%d moved=%s",
            state.round, state.step_x, state.step_y, chosen.point.x, chosen.point.y, chosen.score, moved,
        )
        if moved:
            if on_progress is not None:
                on_progress(ProgressReport(round=state.round, point=chosen.point, score=chosen.score, diff_image=chosen.diff_image))
            if progress_delay > 0:
                time.sleep(progress_delay)

        state.current = chosen.point
        last = chosen
        state.round += 1
        decay = STEP_DECAY_BASE ** state.round
        state.step_x *= decay
        state.step_y *= decay

    if not cancelled:
        logger.info(
            "Search converged after %d rounds at letter=%s word=%s (score=%s)",
            state.round, state.current.x, state.current.y, last.score if last else None,
        )
    return OptimizationResult(
        point=state.current,
        rounds=state.round,
        score=last.score if last else None,
        diff_image=last.diff_image if last else None,
        history=history,
        cancelled=cancelled,
    )


def optimize(
    text: str,
    reference: PixelImage,
    font_size: float,
    fallback_settings: RenderSettings,
    initial_letter_spacing: float = 0.0,
    initial_word_spacing: float = 0.0,
    *,
    on_progress: ProgressCallback | None = None,
    cancel: CancelToken | None = None,
    progress_delay: float = 0.0,
    max_workers: int = MAX_WORKERS,
) -> OptimizationResult:
    """
    Find the fallback letter/word spacing whose rendering differs least from reference.
    With max_workers > 1 the five candidates of a round are rendered in parallel threads.

    initial_letter_spacing / initial_word_spacing are the webfont offsets the reference was
    rendered with. They are recorded in the log only; the fallback search starts at (0, 0).
    """
    bound = search_bound(font_size)
    evaluator = CandidateEvaluator(reference, text, fallback_settings)
    logger.info(
        "Optimizing %r against reference (webfont offsets %s, %s): bound=±%.2f px, initial step=%.2f px, workers=%d",
        fallback_settings.font_family, initial_letter_spacing, initial_word_spacing,
        bound, initial_step(bound), max_workers,
    )
    if max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="fontmatch") as executor:
            return search(
                lambda pts: evaluator.evaluate_many(pts, executor),
                bound,
                on_progress=on_progress,
                cancel=cancel,
                progress_delay=progress_delay,
            )
    return search(
        evaluator.evaluate_many,
        bound,
        on_progress=on_progress,
        cancel=cancel,
        progress_delay=progress_delay,
    )
