# fontmatch/core/diff.py
"""
Perceptual pixel diff of two equal-sized RGBA buffers with pixelmatch semantics.
Returns a mismatch count and a visualization: mismatches red, the rest faded grey.

With anti-aliased pixels counted (the search default) pixelmatch never consults its
anti-aliasing detector, so that case runs as a vectorised numpy YIQ comparison. Excluding
anti-aliasing is delegated to the pixelmatch package itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from PIL import Image
from pixelmatch.contrib.PIL import pixelmatch

from fontmatch.core.config import (
    DIFF_AA_COLOR,
    DIFF_COLOR,
    DIFF_GRAY_ALPHA,
    DIFF_INCLUDE_AA,
    DIFF_MAX_YIQ_DELTA,
    DIFF_THRESHOLD,
)
from fontmatch.core.types import PixelImage


@dataclass(frozen=True)
class DiffResult:
    mismatch: int
    image: PixelImage = field(repr=False, compare=False)


def _rgb2y(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    return r * 0.29889531 + g * 0.58662247 + b * 0.11448223


def _rgb2i(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    return r * 0.59597799 - g * 0.27417610 - b * 0.32180189


def _rgb2q(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    return r * 0.21147017 - g * 0.52261711 + b * 0.31114694


def _blend_on_white(img: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """RGB channels composited over white by their alpha, as float64."""
    f = img.astype(np.float64)
    a = f[..., 3] / 255.0
    return tuple(255.0 + (f[..., c] - 255.0) * a for c in range(3))  # type: ignore[return-value]


def color_delta(img1: PixelImage, img2: PixelImage) -> np.ndarray:
    """Squared YIQ distance per pixel; negative where img1 is brighter."""
    r1, g1, b1 = _blend_on_white(img1)
    r2, g2, b2 = _blend_on_white(img2)
    y1 = _rgb2y(r1, g1, b1)
    y2 = _rgb2y(r2, g2, b2)
    y = y1 - y2
    i = _rgb2i(r1, g1, b1) - _rgb2i(r2, g2, b2)
    q = _rgb2q(r1, g1, b1) - _rgb2q(r2, g2, b2)
    delta = 0.5053 * y * y + 0.299 * i * i + 0.1957 * q * q
    return np.where(y1 > y2, -delta, delta)


def _gray_background(img: np.ndarray) -> np.ndarray:
    f = img.astype(np.float64)
    y = _rgb2y(f[..., 0], f[..., 1], f[..., 2])
    a = DIFF_GRAY_ALPHA * f[..., 3] / 255.0
    return np.clip(255.0 + (y - 255.0) * a, 0, 255)


def _pixelmatch_excluding_aa(a: np.ndarray, b: np.ndarray, threshold: float) -> DiffResult:
    h, w = a.shape[:2]
    output = Image.new("RGBA", (w, h))
    mismatch = pixelmatch(
        Image.fromarray(a),
        Image.fromarray(b),
        output,
        threshold=threshold,
        includeAA=False,
        alpha=DIFF_GRAY_ALPHA,
        aa_color=DIFF_AA_COLOR,
        diff_color=DIFF_COLOR,
    )
    return DiffResult(mismatch=int(mismatch), image=np.array(output, dtype=np.uint8))


def diff_images(
    img1: PixelImage,
    img2: PixelImage,
    threshold: float = DIFF_THRESHOLD,
    include_aa: bool = DIFF_INCLUDE_AA,
) -> DiffResult:
    """
    Count pixels whose perceptual colour distance exceeds threshold.
    With include_aa=False, anti-aliased edge pixels are painted yellow and not counted.
    """
    a = np.ascontiguousarray(img1, dtype=np.uint8)
    b = np.ascontiguousarray(img2, dtype=np.uint8)
    if a.shape != b.shape:
        raise ValueError(f"Image sizes do not match: {a.shape} vs {b.shape}")
    if a.ndim != 3 or a.shape[2] != 4:
        raise ValueError(f"Expected RGBA images of shape (h, w, 4), got {a.shape}")
    if not include_aa:
        return _pixelmatch_excluding_aa(a, b, threshold)

    gray = _gray_background(a).astype(np.uint8)
    out = np.empty_like(a)
    out[..., 0] = gray
    out[..., 1] = gray
    out[..., 2] = gray
    out[..., 3] = 255

    if np.array_equal(a, b):
        return DiffResult(mismatch=0, image=out)

    max_delta = DIFF_MAX_YIQ_DELTA * threshold * threshold
    different = np.abs(color_delta(a, b)) > max_delta
    out[different, :3] = DIFF_COLOR
    return DiffResult(mismatch=int(np.count_nonzero(different)), image=out)
