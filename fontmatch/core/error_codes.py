"""
Structured error codes and exceptions for matching runs.
Raise the exceptions from core code; map error_key to user-facing messages in the UI and CLI.
"""

from __future__ import annotations

# Known error keys
INVALID_CONFIGURATION = "invalid_configuration"
RENDER_FAILED = "render_failed"
RUN_CANCELLED = "run_cancelled"
RUN_FAILED = "run_failed"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    INVALID_CONFIGURATION: "Invalid settings. Check font size, line height, weight and text.",
    RENDER_FAILED: "Could not render the text. Check that the font files are readable.",
    RUN_CANCELLED: "Matching was cancelled; the best spacing found so far is shown.",
    RUN_FAILED: "Run failed. Check fonts and inputs.",
}


class FontMatchError(Exception):
    """Base class for errors raised by fontmatch.core."""
    error_key: str = RUN_FAILED


class InvalidConfiguration(FontMatchError, ValueError):
    """Settings rejected before a run starts."""
    error_key = INVALID_CONFIGURATION


class RenderFailure(FontMatchError, RuntimeError):
    """The rasterizer could not produce an image; aborts the run."""
    error_key = RENDER_FAILED


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
