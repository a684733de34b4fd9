"""
Helper functions for formatting data into human-readable strings.
"""

from datetime import timedelta

# Jellyfin expresses durations in 100-nanosecond ticks.
TICKS_PER_SECOND = 10_000_000


def ticks_to_timedelta(ticks: int) -> timedelta:
    """Converts server ticks into a timedelta (microsecond precision)."""
    return timedelta(microseconds=ticks // 10)


def format_size(bytes_size: int) -> str:
    """Formats bytes into a human-readable size string (e.g., '145.3 MB')."""
    if bytes_size <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    while bytes_size >= 1024 and i < len(units) - 1:
        bytes_size /= 1024
        i += 1
    return f"{bytes_size:.1f} {units[i]}"


def format_duration(seconds: float) -> str:
    """
    Formats a duration in seconds into a human-readable string (e.g., '2h 34m 12s').
    """
    s = int(seconds)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def format_ticks(ticks: int) -> str:
    """Formats a tick count as a track length, e.g. '3:07' or '1:02:45'."""
    total = ticks // TICKS_PER_SECOND
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
