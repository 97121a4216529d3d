"""Submission of a release's tracks as back-dated scrobbles."""

import logging
import time
from typing import Callable, List, Optional, Protocol, Sequence

from ..errors import SubmissionFailedError
from ..models.scrobble import ScrobbleEntry, ScrobbleReport
from ..models.track import NormalizedTrack, Track
from ..utils.formatting import format_duration
from .duration import DEFAULT_DURATION, MIN_DURATION, normalize_tracks
from .timeline import schedule_timestamps


class ScrobbleClient(Protocol):
    """Anything able to submit a single scrobble."""

    def scrobble(self, entry: ScrobbleEntry, session_key: str) -> object:
        ...


class Scrobbler:
    """Submits one release as a sequence of back-dated scrobbles."""

    def __init__(
        self,
        client: ScrobbleClient,
        logger: logging.Logger,
        default_duration: int = DEFAULT_DURATION,
        min_duration: int = MIN_DURATION,
        delay_ms: int = 1000,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time
    ):
        """Initialize the scrobbler.

        Args:
            client: Submission client (usually LastfmClient)
            logger: Logger instance
            default_duration: Seconds assumed for tracks without a duration
            min_duration: Minimum submitted duration in seconds
            delay_ms: Pause between submissions in milliseconds
            sleep: Sleep function, replaced in tests
            clock: Time source returning Unix seconds, replaced in tests
        """
        self.client = client
        self.logger = logger
        self.default_duration = default_duration
        self.min_duration = min_duration
        self.delay_ms = delay_ms
        self.sleep = sleep
        self.clock = clock

    def normalize(self, tracks: Sequence[Track]) -> List[NormalizedTrack]:
        """Resolve track durations with this scrobbler's defaults."""
        return normalize_tracks(tracks, self.default_duration, self.min_duration)

    def run(
        self,
        artist: str,
        album: str,
        tracks: Sequence[Track],
        session_key: str,
        dry_run: bool = False,
        delay_ms: Optional[int] = None,
        now: Optional[int] = None
    ) -> ScrobbleReport:
        """Scrobble every track of a release.

        Timestamps are computed once for the whole session before anything is
        sent. A failed submission is logged and the remaining tracks are still
        attempted.

        Args:
            artist: Artist name
            album: Album title
            tracks: Tracks in play order
            session_key: Last.fm session key (ignored in dry-run mode)
            dry_run: Compute everything but skip the network calls
            delay_ms: Override for the pause between submissions
            now: Reference Unix time (defaults to the current time)

        Returns:
            ScrobbleReport with one entry per processed track
        """
        delay_ms = self.delay_ms if delay_ms is None else delay_ms
        now = int(self.clock()) if now is None else now

        normalized = self.normalize(tracks)
        timestamps = schedule_timestamps(
            [track.duration_seconds for track in normalized], now
        )

        report = ScrobbleReport(dry_run=dry_run)
        self.logger.info(
            f"{'Dry run for' if dry_run else 'Scrobbling'} {len(normalized)} track(s) "
            f"of {artist} - {album}"
        )

        for index, (track, timestamp) in enumerate(zip(normalized, timestamps), start=1):
            entry = ScrobbleEntry(
                artist=artist,
                track=track.title,
                album=album,
                timestamp=timestamp,
                duration=track.duration_seconds
            )
            report.entries.append(entry)
            label = f"{index}. {artist} - {track.title} ({format_duration(track.duration_seconds)})"

            if dry_run:
                self.logger.info(f"[dry run] {label} @ {timestamp}")
                continue

            try:
                self.client.scrobble(entry, session_key)
                self.logger.info(f"Scrobbled {label}")
            except SubmissionFailedError as e:
                report.failures.append(e)
                self.logger.error(f"Failed to scrobble '{track.title}': {e.reason}")

            if index < len(normalized) and delay_ms > 0:
                self.sleep(delay_ms / 1000)

        return report
