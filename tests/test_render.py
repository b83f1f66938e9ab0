# tests/test_render.py
"""
Rasterizer: surface size, background, determinism, spacing effects, comparison overlay.
"""

from __future__ import annotations

import numpy as np

from fontmatch.core.config import BG_COLOR_FALLBACK, CANVAS_HEIGHT_PX, CANVAS_WIDTH_PX
from fontmatch.core.render import RenderSurface, render, render_comparison, render_image, save_png
from fontmatch.core.types import RenderSettings

TEXT = "Sphinx of black quartz, judge my vow."
SETTINGS = RenderSettings(font_family="DejaVu Sans", font_size=20, line_height=1.1)


def _ink(img: np.ndarray) -> np.ndarray:
    """Mask of dark pixels."""
    return img[..., :3].max(axis=-1) < 128


def test_render_image_has_canvas_size() -> None:
    img = render_image(TEXT, SETTINGS)
    assert img.shape == (CANVAS_HEIGHT_PX, CANVAS_WIDTH_PX, 4)
    assert img.dtype == np.uint8


def test_background_and_padding() -> None:
    img = render_image(TEXT, SETTINGS, background=BG_COLOR_FALLBACK)
    assert tuple(img[0, 0]) == (0xFF, 0xF9, 0xB3, 255)
    ink = _ink(img)
    assert ink.any()
    ys, xs = np.nonzero(ink)
    assert xs.min() >= 20
    assert ys.min() >= 20


def test_render_is_deterministic() -> None:
    a = render_image(TEXT, SETTINGS.with_spacing(0.5, 1.5))
    b = render_image(TEXT, SETTINGS.with_spacing(0.5, 1.5))
    assert np.array_equal(a, b)


def test_letter_spacing_widens_text() -> None:
    narrow = _ink(render_image(TEXT, SETTINGS))
    wide = _ink(render_image(TEXT, SETTINGS.with_spacing(3.0, 0.0)))
    assert np.nonzero(wide)[1].max() > np.nonzero(narrow)[1].max()


def test_word_spacing_moves_later_words() -> None:
    a = render_image(TEXT, SETTINGS)
    b = render_image(TEXT, SETTINGS.with_spacing(0.0, 4.0))
    assert not np.array_equal(a, b)


def test_long_text_wraps_to_more_lines() -> None:
    short = _ink(render_image("word", SETTINGS))
    long = _ink(render_image("word " * 200, SETTINGS))
    assert np.nonzero(long)[0].max() > np.nonzero(short)[0].max() + 3 * SETTINGS.line_height_px
    assert np.nonzero(long)[1].max() < CANVAS_WIDTH_PX - 20 + 2


def test_text_transform_applied() -> None:
    upper = render_image("abc", RenderSettings("DejaVu Sans", 20, 1.1, text_transform="uppercase"))
    assert np.array_equal(upper, render_image("ABC", SETTINGS))


def test_surface_pixels_are_copies() -> None:
    surface = RenderSurface(200, 80)
    render(surface, "one", SETTINGS, "#fff")
    first = surface.pixels()
    render(surface, "two", SETTINGS, "#000")
    assert tuple(first[0, 0]) == (255, 255, 255, 255)
    assert tuple(surface.pixels()[0, 0]) == (0, 0, 0, 255)


def test_comparison_overlays_black_and_red(tmp_path) -> None:
    img = render_comparison(TEXT, SETTINGS, SETTINGS.with_spacing(1.0, 0.0))
    rgb = img[..., :3].astype(int)
    red = (rgb[..., 0] > 200) & (rgb[..., 1] < 60) & (rgb[..., 2] < 60)
    black = rgb.max(axis=-1) < 60
    assert red.any()
    assert black.any()
    out = save_png(img, tmp_path / "comparison.png")
    assert out.exists()


def test_sub_pixel_spacing_changes_pixels() -> None:
    base = render_image("Hello world", SETTINGS, width=300, height=60)
    for ls, ws in [(0.0, -0.5), (0.0, 0.5), (0.25, 0.0), (-0.25, 0.0)]:
        shifted = render_image("Hello world", SETTINGS.with_spacing(ls, ws), width=300, height=60)
        assert not np.array_equal(base, shifted), (ls, ws)


def test_surface_is_supersampled() -> None:
    surface = RenderSurface(200, 80, scale=4)
    assert surface.coverage.size == (800, 320)
    assert surface.content_box == (20, 20, 160, 40)
