# fontmatch/core/evaluate.py
"""
Candidate evaluation: render the fallback at a (letter, word) spacing point and diff it
against the fixed reference image. Score = mismatched pixel count.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor
from typing import Iterable

from fontmatch.core.config import (
    BG_COLOR_FALLBACK,
    DIFF_INCLUDE_AA,
    DIFF_THRESHOLD,
    SEARCH_DEBUG,
)
from fontmatch.core.diff import diff_images
from fontmatch.core.render import RenderSurface, render
from fontmatch.core.types import PixelImage, RenderSettings, ScoredCandidate, SearchPoint

logger = logging.getLogger(__name__)


class CandidateEvaluator:
    """
    Scores spacing points for one (reference, text, fallback settings) job.
    Each thread renders on its own surface; calls from one thread reuse a single surface.
    """

    def __init__(
        self,
        reference: PixelImage,
        text: str,
        base_settings: RenderSettings,
        background: str = BG_COLOR_FALLBACK,
        threshold: float = DIFF_THRESHOLD,
        include_aa: bool = DIFF_INCLUDE_AA,
    ) -> None:
        self.reference = reference
        self.text = text
        self.base_settings = base_settings
        self.background = background
        self.threshold = threshold
        self.include_aa = include_aa
        self._local = threading.local()

    def _surface(self) -> RenderSurface:
        surface = getattr(self._local, "surface", None)
        if surface is None:
            height, width = self.reference.shape[:2]
            surface = RenderSurface(width, height)
            self._local.surface = surface
        return surface

    def evaluate(self, point: SearchPoint) -> ScoredCandidate:
        surface = self._surface()
        settings = self.base_settings.with_spacing(point.x, point.y)
        render(surface, self.text, settings, self.background)
        # The surface is overwritten by the next call; copy before diffing.
        fallback = surface.pixels()
        result = diff_images(self.reference, fallback, threshold=self.threshold, include_aa=self.include_aa)
        if SEARCH_DEBUG:
            logger.debug("candidate ls=%s ws=%s score=%d", point.x, point.y, result.mismatch)
        return ScoredCandidate(point=point, score=result.mismatch, diff_image=result.image)

    __call__ = evaluate

    def evaluate_many(self, points: Iterable[SearchPoint], executor: Executor | None = None) -> list[ScoredCandidate]:
        """Scores in input order; concurrently when an executor is given."""
        if executor is None:
            return [self.evaluate(p) for p in points]
        return list(executor.map(self.evaluate, points))


def evaluate(
    reference: PixelImage,
    text: str,
    base_settings: RenderSettings,
    point: SearchPoint,
) -> ScoredCandidate:
    """Score a single point on a fresh surface."""
    return CandidateEvaluator(reference, text, base_settings).evaluate(point)
