"""Fallback font spacing matcher."""

__version__ = "0.1.0"
