# fontmatch/core/runner.py
"""
CLI entrypoint: register font files, match fallback spacing to the webfont, write the report.
Progress lines use the same strings as the UI.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from fontmatch.core.config import (
    DEFAULT_FALLBACK_FAMILY,
    DEFAULT_FONT_SIZE_PX,
    DEFAULT_FONT_WEIGHT,
    DEFAULT_LETTER_SPACING_PX,
    DEFAULT_LINE_HEIGHT,
    DEFAULT_TEXT,
    DEFAULT_TEXT_TRANSFORM,
    DEFAULT_WEBFONT_FAMILY,
    DEFAULT_WORD_SPACING_PX,
    FONT_WEIGHTS,
    MAX_WORKERS,
    REPORTS_DIR,
    TEXT_TRANSFORMS,
)
from fontmatch.core.error_codes import FontMatchError, user_message
from fontmatch.core.fonts import register_font_file
from fontmatch.core.reporting import write_match_report
from fontmatch.core.session import match_fonts
from fontmatch.core.types import MatchConfig, ProgressReport

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Match fallback font letter/word spacing to a webfont.")
    p.add_argument("--webfont", type=str, default=DEFAULT_WEBFONT_FAMILY, help="Webfont family name")
    p.add_argument("--fallback", type=str, default=DEFAULT_FALLBACK_FAMILY, help="Fallback family name")
    p.add_argument("--font-file", type=str, action="append", default=[], dest="font_files",
                   help="Font file to register under its file name (repeatable)")
    p.add_argument("--text", type=str, default=None, help="Text to render (default: lorem ipsum)")
    p.add_argument("--text-file", type=str, default=None, dest="text_file", help="Read text from a UTF-8 file")
    p.add_argument("--font-size", type=float, default=DEFAULT_FONT_SIZE_PX, dest="font_size", help="Font size (px)")
    p.add_argument("--line-height", type=float, default=DEFAULT_LINE_HEIGHT, dest="line_height", help="Line height (unitless)")
    p.add_argument("--font-weight", type=int, default=DEFAULT_FONT_WEIGHT, dest="font_weight", choices=FONT_WEIGHTS)
    p.add_argument("--text-transform", type=str, default=DEFAULT_TEXT_TRANSFORM, dest="text_transform", choices=TEXT_TRANSFORMS)
    p.add_argument("--letter-spacing", type=float, default=DEFAULT_LETTER_SPACING_PX, dest="letter_spacing",
                   help="Webfont letter spacing offset (px)")
    p.add_argument("--word-spacing", type=float, default=DEFAULT_WORD_SPACING_PX, dest="word_spacing",
                   help="Webfont word spacing offset (px)")
    p.add_argument("--workers", type=int, default=MAX_WORKERS, help="Threads for candidate evaluation")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--no-report", action="store_true", dest="no_report", help="Print the result only")
    p.add_argument("--quiet", action="store_true", help="Do not print progress lines")
    return p.parse_args(argv)


def _read_text(args: argparse.Namespace) -> str:
    if args.text_file:
        return Path(args.text_file).read_text(encoding="utf-8")
    return args.text if args.text is not None else DEFAULT_TEXT


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=getattr(logging, os.environ.get("LOG_LEVEL", "WARNING").upper(), logging.WARNING))
    args = _parse_args(argv)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    def _print_progress(report: ProgressReport) -> None:
        print(report.message, flush=True)

    try:
        for font_file in args.font_files:
            register_font_file(font_file)
        config = MatchConfig(
            text=_read_text(args),
            webfont_family=args.webfont,
            fallback_family=args.fallback,
            font_size=args.font_size,
            line_height=args.line_height,
            font_weight=args.font_weight,
            text_transform=args.text_transform,
            letter_spacing=args.letter_spacing,
            word_spacing=args.word_spacing,
        )
        result = match_fonts(
            config,
            on_progress=None if args.quiet else _print_progress,
            max_workers=max(1, args.workers),
        )
    except FontMatchError as e:
        logger.error("%s", e)
        print(f"{user_message(e.error_key)} ({e})", file=sys.stderr)
        return 1

    if not args.no_report:
        for p in write_match_report(repo_root, args.run_name, result, output_dir=args.output_dir):
            print(p)
    print(result.message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
