"""Track duration parsing and normalization."""

from typing import Iterable, List, Optional

from ..models.track import NormalizedTrack, Track

DEFAULT_DURATION = 180  # Used when Discogs lists no usable duration
MIN_DURATION = 30  # Last.fm ignores shorter listens

# Weight of each colon-separated segment, counted from the right
_SEGMENT_WEIGHTS = (1, 60, 3600)


def parse_duration(raw: Optional[str], default: int = DEFAULT_DURATION) -> int:
    """Convert a Discogs duration string to whole seconds.

    Accepts ``SS``, ``MM:SS`` and ``HH:MM:SS``. Anything else, including a
    missing value or a segment that is not a plain integer, yields ``default``.

    Args:
        raw: Duration text as listed on Discogs (may be None)
        default: Seconds to use when the text is missing or malformed

    Returns:
        Duration in seconds
    """
    if raw is None or not raw.strip():
        return default

    segments = [segment.strip() for segment in raw.strip().split(':')]
    if len(segments) > len(_SEGMENT_WEIGHTS):
        return default

    total = 0
    for weight, segment in zip(_SEGMENT_WEIGHTS, reversed(segments)):
        # isdigit() alone accepts superscripts and other digits int() rejects
        if not (segment.isascii() and segment.isdigit()):
            return default
        total += int(segment) * weight

    return total


def floor_duration(seconds: int, minimum: int = MIN_DURATION) -> int:
    """Raise a duration to the minimum Last.fm accepts."""
    return max(seconds, minimum)


def normalize_track(
    track: Track,
    default: int = DEFAULT_DURATION,
    minimum: int = MIN_DURATION
) -> NormalizedTrack:
    """Resolve the duration of a single track.

    Args:
        track: Track as fetched from Discogs
        default: Fallback duration in seconds
        minimum: Minimum submitted duration in seconds

    Returns:
        NormalizedTrack with both the parsed and the submitted duration
    """
    parsed = parse_duration(track.raw_duration, default)
    return NormalizedTrack(
        track=track,
        parsed_seconds=parsed,
        duration_seconds=floor_duration(parsed, minimum)
    )


def normalize_tracks(
    tracks: Iterable[Track],
    default: int = DEFAULT_DURATION,
    minimum: int = MIN_DURATION
) -> List[NormalizedTrack]:
    """Resolve durations for a whole tracklist, keeping its order."""
    return [normalize_track(track, default, minimum) for track in tracks]
