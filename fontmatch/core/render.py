# fontmatch/core/render.py
"""
Pillow rasterizer: paint a background, then wrapped text top-left aligned inside the
padded content box. One surface can be reused across calls; pixels() hands out copies.

Text is drawn into a coverage mask RENDER_SUPERSAMPLE times larger than the canvas and
box-filtered down before it is painted, so sub-pixel spacing changes move glyph edges.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from fontmatch.core.config import (
    CANVAS_HEIGHT_PX,
    CANVAS_PADDING_X_PX,
    CANVAS_PADDING_Y_PX,
    CANVAS_WIDTH_PX,
    COLOR_BLACK,
    COLOR_RED,
    COLOR_WHITE,
    RENDER_SUPERSAMPLE,
)
from fontmatch.core.error_codes import RenderFailure
from fontmatch.core.fonts import load_font
from fontmatch.core.text_metrics import measure_text, transform_text, wrap_text
from fontmatch.core.types import PixelImage, RenderSettings


class RenderSurface:
    """Mutable RGBA drawing surface plus its supersampled coverage mask. Every render overwrites both."""

    def __init__(
        self,
        width: int = CANVAS_WIDTH_PX,
        height: int = CANVAS_HEIGHT_PX,
        scale: int = RENDER_SUPERSAMPLE,
    ) -> None:
        self.width = width
        self.height = height
        self.scale = max(1, int(scale))
        self.image = Image.new("RGBA", (width, height), COLOR_WHITE)
        self.coverage = Image.new("L", (width * self.scale, height * self.scale), 0)
        self.draw = ImageDraw.Draw(self.coverage)

    @property
    def content_box(self) -> tuple[int, int, int, int]:
        """(x, y, width, height) of the text area, in canvas px."""
        return (
            CANVAS_PADDING_X_PX,
            CANVAS_PADDING_Y_PX,
            self.width - CANVAS_PADDING_X_PX * 2,
            self.height - CANVAS_PADDING_Y_PX * 2,
        )

    def fill(self, color: str) -> None:
        self.image.paste(color, (0, 0, self.width, self.height))

    def clear_coverage(self) -> None:
        self.draw.rectangle((0, 0, self.coverage.width, self.coverage.height), fill=0)

    def composite(self, color: str) -> None:
        """Paint color through the coverage mask, box-filtered down to canvas size."""
        mask = self.coverage.resize((self.width, self.height), Image.Resampling.BOX)
        self.image.paste(color, (0, 0, self.width, self.height), mask)

    def pixels(self) -> PixelImage:
        """Copy of the current pixels, shape (height, width, 4)."""
        return np.array(self.image, dtype=np.uint8)


def _draw_line(
    draw: ImageDraw.ImageDraw,
    x: float,
    y: float,
    line: str,
    font: ImageFont.FreeTypeFont,
    letter_spacing: float,
    word_spacing: float,
) -> None:
    if letter_spacing == 0 and word_spacing == 0:
        draw.text((x, y), line, font=font, fill=255)
        return
    # Character by character; prefix advances keep kerning.
    for i, ch in enumerate(line):
        if ch.isspace():
            continue
        cx = x + measure_text(line[:i], font, letter_spacing, word_spacing)
        draw.text((cx, y), ch, font=font, fill=255)


def draw_text(surface: RenderSurface, text: str, settings: RenderSettings, fill: str = COLOR_BLACK) -> None:
    """Paint text over the current surface contents."""
    scale = surface.scale
    font = load_font(settings.font_family, settings.font_size * scale, settings.font_weight)
    box_x, box_y, box_w, _ = surface.content_box
    body = transform_text(text, settings.text_transform)
    letter_spacing = settings.letter_spacing * scale
    word_spacing = settings.word_spacing * scale

    def measure(s: str) -> float:
        return measure_text(s, font, letter_spacing, word_spacing)

    surface.clear_coverage()
    try:
        lines = wrap_text(body, box_w * scale, measure)
        y = float(box_y * scale)
        for line in lines:
            _draw_line(surface.draw, box_x * scale, y, line.strip(), font, letter_spacing, word_spacing)
            y += settings.line_height_px * scale
    except (OSError, ValueError) as e:
        raise RenderFailure(f"Rendering with {settings.font_family!r} failed: {e}") from e
    surface.composite(fill)


def render(surface: RenderSurface, text: str, settings: RenderSettings, background: str) -> None:
    """Paint background, then text in black."""
    surface.fill(background)
    draw_text(surface, text, settings, fill=COLOR_BLACK)


def render_image(
    text: str,
    settings: RenderSettings,
    background: str = COLOR_WHITE,
    width: int = CANVAS_WIDTH_PX,
    height: int = CANVAS_HEIGHT_PX,
) -> PixelImage:
    """Render on a fresh surface and return its pixels."""
    surface = RenderSurface(width, height)
    render(surface, text, settings, background)
    return surface.pixels()


def render_comparison(
    text: str,
    webfont_settings: RenderSettings,
    fallback_settings: RenderSettings,
    width: int = CANVAS_WIDTH_PX,
    height: int = CANVAS_HEIGHT_PX,
) -> PixelImage:
    """Webfont in black with the fallback overlaid in red, on white."""
    surface = RenderSurface(width, height)
    surface.fill(COLOR_WHITE)
    draw_text(surface, text, webfont_settings, fill=COLOR_BLACK)
    draw_text(surface, text, fallback_settings, fill=COLOR_RED)
    return surface.pixels()


def save_png(image: PixelImage, output_path: str | Path) -> Path:
    out = Path(output_path)
    Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8)).save(out)
    return out
