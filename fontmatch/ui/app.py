# fontmatch/ui/app.py
"""
Streamlit UI: sidebar (fonts, typography, text), live previews of both renderings,
Match button streaming progress and the diff image, final comparison and report.
Run with: streamlit run fontmatch/ui/app.py
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
import tempfile
import warnings
from datetime import datetime, timezone
from pathlib import Path

# Configure logging from env (e.g. LOG_LEVEL=DEBUG for development)
_log_level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, _log_level_name, logging.INFO))

# Ensure repo root is on path when Streamlit loads this file
_repo_root = Path(__file__).resolve().parent.parent.parent
if not (_repo_root / "fontmatch" / "__init__.py").exists():
    _repo_root = Path.cwd().resolve()
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

import streamlit as st

from fontmatch.core.config import (
    BG_COLOR_FALLBACK,
    BG_COLOR_WEBFONT,
    DEFAULT_FALLBACK_FAMILY,
    DEFAULT_FONT_SIZE_PX,
    DEFAULT_FONT_WEIGHT,
    DEFAULT_LETTER_SPACING_PX,
    DEFAULT_LINE_HEIGHT,
    DEFAULT_TEXT,
    DEFAULT_WEBFONT_FAMILY,
    DEFAULT_WORD_SPACING_PX,
    FONT_WEIGHTS,
    MAX_WORKERS,
    PROGRESS_DELAY_S,
    REPORTS_DIR,
    TEXT_TRANSFORMS,
)
from fontmatch.core.error_codes import FontMatchError, user_message
from fontmatch.core.fonts import register_font_file, registered_families
from fontmatch.core.render import render_image
from fontmatch.core.reporting import match_to_dict, write_match_report
from fontmatch.core.session import match_fonts
from fontmatch.core.types import MatchConfig, ProgressReport
from fontmatch.core.validate import check_match_config
from fontmatch.ui.help_text import (
    GLOSSARY_MD,
    MATCH_SHORT,
    QUICK_TROUBLESHOOT_MD,
    TOOLTIP_ANIMATE,
    TOOLTIP_FALLBACK,
    TOOLTIP_FONT_SIZE,
    TOOLTIP_FONT_UPLOAD,
    TOOLTIP_LINE_HEIGHT,
    TOOLTIP_SPACING,
    TOOLTIP_WEBFONT,
    TOOLTIP_WORKERS,
)

logger = logging.getLogger(__name__)

_UPLOAD_DIR = Path(tempfile.gettempdir()) / "fontmatch_uploads"


def _run_name() -> str:
    return datetime.now(timezone.utc).strftime("match_%Y%m%d_%H%M%S")


def _register_uploads(files) -> list[str]:
    """Write uploaded font files to a temp dir and register them. Returns family names."""
    families: list[str] = []
    if not files:
        return families
    _UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    for f in files:
        safe_name = re.sub(r"[^A-Za-z0-9_.-]", "_", f.name)
        path = _UPLOAD_DIR / safe_name
        path.write_bytes(f.getvalue())
        families.append(register_font_file(path, family=f.name.split(".")[0]))
    return families


def _preview(config: MatchConfig) -> None:
    """Both renderings side by side; font substitution warnings shown inline."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            webfont_img = render_image(config.text, config.webfont_settings(), background=BG_COLOR_WEBFONT)
            fallback_img = render_image(config.text, config.fallback_settings(), background=BG_COLOR_FALLBACK)
        except FontMatchError as e:
            st.error(user_message(e.error_key))
            st.caption(str(e))
            return
    for w in caught:
        st.warning(str(w.message))
    left, right = st.columns(2)
    with left:
        st.image(webfont_img, caption=f"Webfont: {config.webfont_family}", width="stretch")
    with right:
        st.image(fallback_img, caption=f"Fallback: {config.fallback_family}", width="stretch")


st.set_page_config(page_title="Auto Font Matcher", layout="wide")
st.title("Auto Font Matcher")
st.caption(MATCH_SHORT)

with st.sidebar:
    st.header("Fonts")
    uploaded = st.file_uploader(
        "Upload font files",
        type=["ttf", "otf", "woff", "woff2"],
        accept_multiple_files=True,
        help=TOOLTIP_FONT_UPLOAD,
    )
    try:
        new_families = _register_uploads(uploaded)
    except FontMatchError as e:
        new_families = []
        st.error(str(e))
    if registered_families():
        st.caption("Uploaded: " + ", ".join(registered_families()))
    webfont_family = st.text_input(
        "Webfont family",
        value=new_families[0] if new_families else DEFAULT_WEBFONT_FAMILY,
        help=TOOLTIP_WEBFONT,
    )
    fallback_family = st.text_input("Fallback family", value=DEFAULT_FALLBACK_FAMILY, help=TOOLTIP_FALLBACK)

    st.header("Typography")
    font_size = st.number_input("Font size (px)", min_value=1, value=int(DEFAULT_FONT_SIZE_PX), step=1, help=TOOLTIP_FONT_SIZE)
    line_height = st.number_input("Line height (unitless)", min_value=0.01, value=float(DEFAULT_LINE_HEIGHT), step=0.01, help=TOOLTIP_LINE_HEIGHT)
    font_weight = st.selectbox("Font weight", FONT_WEIGHTS, index=FONT_WEIGHTS.index(DEFAULT_FONT_WEIGHT))
    text_transform = st.selectbox("Text transform", TEXT_TRANSFORMS, index=0)
    letter_spacing = st.number_input("Letter spacing (px)", value=float(DEFAULT_LETTER_SPACING_PX), step=0.1, help=TOOLTIP_SPACING)
    word_spacing = st.number_input("Word spacing (px)", value=float(DEFAULT_WORD_SPACING_PX), step=0.1, help=TOOLTIP_SPACING)

    with st.expander("Advanced"):
        animate = st.checkbox("Animate progress", value=False, help=TOOLTIP_ANIMATE)
        workers = st.number_input("Workers", min_value=1, max_value=8, value=int(MAX_WORKERS), step=1, help=TOOLTIP_WORKERS)

    with st.expander("Help & glossary"):
        st.markdown(GLOSSARY_MD)
        st.markdown(QUICK_TROUBLESHOOT_MD)

text = st.text_area("Text", value=DEFAULT_TEXT, height=150)

config = MatchConfig(
    text=text,
    webfont_family=webfont_family.strip(),
    fallback_family=fallback_family.strip(),
    font_size=float(font_size),
    line_height=float(line_height),
    font_weight=int(font_weight),
    text_transform=text_transform,
    letter_spacing=float(letter_spacing),
    word_spacing=float(word_spacing),
)

ok, err = check_match_config(config)
if not ok:
    st.error(err)
    st.stop()

_preview(config)

if st.button("Match", type="primary"):
    status = st.empty()
    diff_slot = st.empty()

    def _on_progress(report: ProgressReport) -> None:
        status.code(report.message, language=None)
        diff_slot.image(report.diff_image, caption=f"Diff, round {report.round} ({report.score} px)", width="stretch")

    try:
        with st.spinner("Matching..."):
            result = match_fonts(
                config,
                on_progress=_on_progress,
                progress_delay=PROGRESS_DELAY_S if animate else 0.0,
                max_workers=int(workers),
            )
    except FontMatchError as e:
        logger.exception("Match failed")
        st.error(user_message(e.error_key))
        st.caption(str(e))
        st.stop()

    status.code(result.message, language=None)
    diff_slot.image(result.comparison_image, caption="Webfont (black) vs. fallback at best spacing (red)", width="stretch")
    st.success(f"Best fallback spacing: {json.dumps(result.point.as_css())}")

    run_name = _run_name()
    paths = write_match_report(Path.cwd().resolve(), run_name, result, output_dir=REPORTS_DIR)
    st.caption(f"Report written to {paths[0].parent}")
    st.download_button(
        "Download match.json",
        data=json.dumps(match_to_dict(result), indent=2),
        file_name=f"{run_name}.json",
        mime="application/json",
    )
