"""Timestamp helpers for the recents list."""

import time


def now_ms() -> int:
    """Current wall-clock time in integer milliseconds since the epoch."""
    return int(time.time() * 1000)


def format_time_ago(timestamp_ms: int, now: int | None = None) -> str:
    """Render a millisecond timestamp as a short relative label.

    Args:
        timestamp_ms: Timestamp in milliseconds since the epoch.
        now: Reference time in milliseconds. If None, uses the current time.

    Returns:
        "just now", "<n>m ago", "<n>h ago" or "<n>d ago".
    """
    if now is None:
        now = now_ms()

    seconds = (now - timestamp_ms) // 1000
    if seconds < 60:
        return "just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"
