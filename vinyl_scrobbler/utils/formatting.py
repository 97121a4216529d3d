"""Display helpers."""

from datetime import datetime


def format_duration(seconds: int) -> str:
    """Format seconds as ``M:SS`` (or ``H:MM:SS`` past an hour)."""
    hours, remainder = divmod(max(seconds, 0), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_timestamp(timestamp: int) -> str:
    """Format a Unix timestamp in local time for display."""
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")
