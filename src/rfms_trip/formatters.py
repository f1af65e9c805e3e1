"""Formatting helpers for trip reporting."""

from __future__ import annotations


def format_duration(seconds: float | None) -> str:
    """Format seconds as HH:MM:SS; hours are not wrapped at 24."""
    if seconds is None or seconds <= 0:
        return "00:00:00"
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    mins, secs = divmod(rest, 60)
    return f"{hours:02d}:{mins:02d}:{secs:02d}"


def format_minutes(minutes: int) -> str:
    """Format a credited-minute count as 'Xh Ym' or 'Ym'."""
    if minutes < 60:
        return f"{minutes}m"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m"
