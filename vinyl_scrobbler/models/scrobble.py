"""Scrobble and session models."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..errors import SubmissionFailedError
from .track import NormalizedTrack


@dataclass(frozen=True)
class ScrobbleEntry:
    """One listen event submitted to Last.fm."""

    artist: str
    track: str
    album: str
    timestamp: int  # Unix epoch seconds
    duration: int  # Seconds

    def to_params(self) -> Dict[str, str]:
        """Build the track.scrobble parameters for this entry.

        Returns:
            Mapping of Last.fm parameter names to string values
        """
        return {
            'artist': self.artist,
            'track': self.track,
            'album': self.album,
            'timestamp': str(self.timestamp),
            'duration': str(self.duration),
        }


@dataclass
class ScrobbleReport:
    """Outcome of scrobbling one release."""

    entries: List[ScrobbleEntry] = field(default_factory=list)
    failures: List[SubmissionFailedError] = field(default_factory=list)
    dry_run: bool = False

    @property
    def processed(self) -> int:
        return len(self.entries)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def succeeded(self) -> int:
        return 0 if self.dry_run else self.processed - self.failed


@dataclass
class SessionRecord:
    """Completion record appended to the scrobble history."""

    artist: str
    album: str
    url: str
    release_id: str
    tracks: List[Dict[str, Any]] = field(default_factory=list)
    scrobbled_at: Optional[datetime] = None
    succeeded: int = 0
    failed: int = 0

    def __post_init__(self):
        """Stamp the record with the current time if not given."""
        if self.scrobbled_at is None:
            self.scrobbled_at = datetime.now().astimezone()

    @classmethod
    def from_report(
        cls,
        artist: str,
        album: str,
        url: str,
        release_id: str,
        tracks: List[NormalizedTrack],
        report: ScrobbleReport
    ) -> 'SessionRecord':
        """Build a record from a finished orchestrator run.

        Args:
            artist: Artist submitted to Last.fm
            album: Album title
            url: Discogs release URL
            release_id: Discogs release ID
            tracks: Normalized tracklist
            report: Orchestrator result

        Returns:
            SessionRecord instance
        """
        return cls(
            artist=artist,
            album=album,
            url=url,
            release_id=release_id,
            tracks=[
                {
                    'position': t.position,
                    'title': t.title,
                    'duration': t.parsed_seconds,
                }
                for t in tracks
            ],
            succeeded=report.succeeded,
            failed=report.failed,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data = asdict(self)
        data['scrobbled_at'] = self.scrobbled_at.isoformat(timespec='seconds')
        return data
