"""Data models for Vinyl Scrobbler."""

from .release import Release
from .scrobble import ScrobbleEntry, ScrobbleReport, SessionRecord
from .track import NormalizedTrack, Track

__all__ = [
    "NormalizedTrack",
    "Release",
    "ScrobbleEntry",
    "ScrobbleReport",
    "SessionRecord",
    "Track",
]
