# fontmatch/core/session.py
"""
End-to-end match: validate, render the webfont reference, optimize the fallback spacing,
render the black/red comparison.
"""

from __future__ import annotations

import logging

from fontmatch.core.config import BG_COLOR_WEBFONT, MAX_WORKERS
from fontmatch.core.optimizer import CancelToken, ProgressCallback, optimize
from fontmatch.core.render import render_comparison, render_image
from fontmatch.core.types import MatchConfig, MatchResult
from fontmatch.core.validate import validate_match_config

logger = logging.getLogger(__name__)


def match_fonts(
    config: MatchConfig,
    on_progress: ProgressCallback | None = None,
    cancel: CancelToken | None = None,
    progress_delay: float = 0.0,
    max_workers: int = MAX_WORKERS,
) -> MatchResult:
    """
    Run one matching job. Raises InvalidConfiguration before any rendering and
    RenderFailure if a rendering cannot be produced.
    """
    validate_match_config(config)
    webfont = config.webfont_settings()
    fallback = config.fallback_settings()
    logger.info(
        "Matching %r -> %r at %spx (weight %d, line height %s, transform %s)",
        config.webfont_family, config.fallback_family, config.font_size,
        config.font_weight, config.line_height, config.text_transform,
    )
    reference = render_image(config.text, webfont, background=BG_COLOR_WEBFONT)
    opt = optimize(
        config.text,
        reference,
        config.font_size,
        fallback,
        config.letter_spacing,
        config.word_spacing,
        on_progress=on_progress,
        cancel=cancel,
        progress_delay=progress_delay,
        max_workers=max_workers,
    )
    best = fallback.with_spacing(opt.point.x, opt.point.y)
    comparison = render_comparison(config.text, webfont, best)
    result = MatchResult(config=config, reference_image=reference, optimization=opt, comparison_image=comparison)
    logger.info("%s", result.message.replace("\n", " "))
    return result
