"""Release data models."""

from dataclasses import dataclass, field, replace
from typing import List, Optional

from .track import Track


@dataclass(frozen=True)
class Release:
    """Release metadata fetched from Discogs."""

    release_id: str
    artist: str
    title: str
    tracks: List[Track] = field(default_factory=list)
    url: str = ""
    year: Optional[int] = None
    thumbnail_url: Optional[str] = None

    def with_artist(self, artist: str) -> 'Release':
        """Return a copy of this release credited to another artist.

        Args:
            artist: Corrected artist name

        Returns:
            New Release instance
        """
        return replace(self, artist=artist)
