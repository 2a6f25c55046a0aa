"""Utility helpers for reusable functionality."""

from .datetime import ensure_utc, now_utc, now_utc_naive

__all__ = ["ensure_utc", "now_utc", "now_utc_naive"]
