"""Back-dated timestamps for a listening session."""

from typing import List, Sequence


def schedule_timestamps(durations: Sequence[int], now: int) -> List[int]:
    """Compute a scrobble timestamp for every track of a session.

    The session is treated as one contiguous listen that finished at ``now``:
    the first track starts ``sum(durations)`` seconds ago and each following
    track starts when the previous one ended.

    Args:
        durations: Per-track durations in seconds, in play order
        now: Reference Unix time in seconds

    Returns:
        Timestamps in the same order as ``durations``

    Raises:
        ValueError: If any duration is not positive
    """
    if any(duration <= 0 for duration in durations):
        raise ValueError("Track durations must be positive")

    total = sum(durations)
    cumulative = 0
    timestamps = []

    for duration in durations:
        timestamps.append(now - (total - cumulative))
        cumulative += duration

    return timestamps
