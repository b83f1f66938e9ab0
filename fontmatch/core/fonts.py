# fontmatch/core/fonts.py
"""
Resolve font family names to font files and load Pillow fonts.
Uploaded font files are registered under a family name taken from the file name.
Unknown families fall back to DEFAULT_FONT_FAMILY with a one-time warning, not an error.
"""

from __future__ import annotations

import logging
import threading
import warnings
from functools import lru_cache
from pathlib import Path

from matplotlib import font_manager
from PIL import ImageFont

from fontmatch.core.config import DEFAULT_FONT_FAMILY
from fontmatch.core.error_codes import InvalidConfiguration, RenderFailure

logger = logging.getLogger(__name__)

_registered_fonts: dict[str, Path] = {}
_font_warning_emitted: set[str] = set()


def family_name_from_file(path: str | Path) -> str:
    """'Brand.Regular.woff' -> 'Brand'."""
    return Path(path).name.split(".")[0]


def register_font_file(path: str | Path, family: str | None = None) -> str:
    """
    Make a font file available under a family name (default: derived from the file name).
    Registered families take precedence over installed fonts. Returns the family name.
    """
    p = Path(path).expanduser().resolve()
    if not p.is_file():
        raise InvalidConfiguration(f"Font file not found: {p}")
    name = family or family_name_from_file(p)
    if not name:
        raise InvalidConfiguration(f"Cannot derive a family name from {p.name!r}.")
    _registered_fonts[name] = p
    _font_warning_emitted.discard(name)
    _resolve_cached.cache_clear()
    logger.info("Registered font %r from %s", name, p)
    return name


def registered_families() -> list[str]:
    return sorted(_registered_fonts)


def clear_registered_fonts() -> None:
    _registered_fonts.clear()
    _font_warning_emitted.clear()
    _resolve_cached.cache_clear()


@lru_cache(maxsize=64)
def _resolve_cached(family: str, weight: int) -> tuple[Path, bool]:
    if family in _registered_fonts:
        return _registered_fonts[family], True
    prop = font_manager.FontProperties(family=family, weight=weight)
    try:
        return Path(font_manager.findfont(prop, fallback_to_default=False)), True
    except ValueError:
        default = font_manager.FontProperties(family=DEFAULT_FONT_FAMILY, weight=weight)
        return Path(font_manager.findfont(default, fallback_to_default=True)), False


def resolve_font_path(family: str, weight: int = 400) -> Path:
    """Font file for family/weight; the default family with a warning if not found."""
    path, found = _resolve_cached(family, int(weight))
    if not found and family not in _font_warning_emitted:
        _font_warning_emitted.add(family)
        warnings.warn(f"Font not found: {family!r}; using {DEFAULT_FONT_FAMILY!r}.", UserWarning)
    return path


# One FreeType face per thread; faces are not safe to share between threads.
@lru_cache(maxsize=32)
def _truetype(path: str, size: int, thread_id: int) -> ImageFont.FreeTypeFont:
    return ImageFont.truetype(path, size=size)


def load_font(family: str, font_size: float, weight: int = 400) -> ImageFont.FreeTypeFont:
    """Load a Pillow font for family at font_size px."""
    path = resolve_font_path(family, weight)
    size = max(1, int(round(font_size)))
    try:
        return _truetype(str(path), size, threading.get_ident())
    except OSError as e:
        raise RenderFailure(f"Cannot load font {family!r} from {path}: {e}") from e
