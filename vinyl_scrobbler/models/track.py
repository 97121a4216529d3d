"""Track data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Track:
    """A tracklist entry as listed on Discogs."""

    title: str
    position: str = ""
    raw_duration: Optional[str] = None  # Discogs text, e.g. "4:05"

    def __post_init__(self):
        """Reject tracks without a title."""
        if not self.title or not self.title.strip():
            raise ValueError("Track title must not be empty")


@dataclass(frozen=True)
class NormalizedTrack:
    """Track with a resolved duration."""

    track: Track
    parsed_seconds: int  # Parser output before the minimum is applied
    duration_seconds: int  # Duration submitted to Last.fm

    @property
    def title(self) -> str:
        return self.track.title

    @property
    def position(self) -> str:
        return self.track.position
