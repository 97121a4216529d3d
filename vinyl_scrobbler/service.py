"""Service wiring for Vinyl Scrobbler."""

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from .config.history import ScrobbleHistory
from .config.settings import Credentials, Settings
from .core.discogs import DiscogsClient
from .core.lastfm import LastfmClient
from .core.scrobbler import Scrobbler
from .errors import AuthenticationFailedError
from .models.release import Release
from .models.scrobble import ScrobbleReport, SessionRecord
from .utils.logger import setup_logger


def read_session_key(path: Optional[Path]) -> Optional[str]:
    """Read a session key stored by the ``auth`` command, if any."""
    if path and path.exists():
        key = path.read_text(encoding='utf-8').strip()
        return key or None
    return None


def write_session_key(path: Path, session_key: str) -> None:
    """Store a session key for later runs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(session_key + '\n', encoding='utf-8')


class VinylScrobblerService:
    """Fetches releases from Discogs and scrobbles them to Last.fm."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        settings: Optional[Settings] = None,
        credentials: Optional[Credentials] = None,
        logger: Optional[logging.Logger] = None,
        discogs: Optional[DiscogsClient] = None,
        lastfm: Optional[LastfmClient] = None,
        sleep: Optional[Callable[[float], None]] = None
    ):
        """Initialize the service.

        Credentials are validated before any client is built.

        Args:
            config_path: Path to configuration file (optional)
            settings: Preloaded settings (skips reading config_path)
            credentials: Preloaded credentials (skips reading the environment)
            logger: Logger instance (one is set up from settings if omitted)
            discogs: Discogs client override
            lastfm: Last.fm client override
            sleep: Sleep function used between submissions

        Raises:
            ConfigurationMissingError: If any credential is missing
        """
        self.settings = settings or Settings.from_file_or_default(config_path)
        self.credentials = credentials or Credentials.from_env()
        self.credentials.require()

        self.logger = logger or setup_logger(
            log_file=self.settings.logging.path,
            level=self.settings.logging.level,
            max_size_mb=self.settings.logging.max_size_mb,
            backup_count=self.settings.logging.backup_count,
            console=True
        )

        self.discogs = discogs or DiscogsClient(
            token=self.credentials.discogs_token,
            logger=self.logger,
            api_url=self.settings.discogs.api_url,
            user_agent=self.settings.discogs.user_agent,
            timeout=self.settings.discogs.timeout
        )
        self.lastfm = lastfm or LastfmClient(
            api_key=self.credentials.lastfm_api_key,
            api_secret=self.credentials.lastfm_api_secret,
            logger=self.logger,
            api_url=self.settings.lastfm.api_url,
            timeout=self.settings.lastfm.timeout
        )
        self.history = ScrobbleHistory(self.settings.history.path, self.logger)

        self.scrobbler = Scrobbler(
            client=self.lastfm,
            logger=self.logger,
            default_duration=self.settings.scrobble.default_duration,
            min_duration=self.settings.scrobble.min_duration,
            delay_ms=self.settings.scrobble.delay_ms,
            sleep=sleep or time.sleep
        )

    def fetch_release(self, url_or_id: str) -> Release:
        """Fetch a release from Discogs.

        Raises:
            ReleaseFetchFailedError: If the release cannot be used
        """
        self.logger.info(f"Fetching release data for {url_or_id}")
        release = self.discogs.get_release(url_or_id)
        self.logger.info(
            f"Found {release.artist} - {release.title} ({len(release.tracks)} tracks)"
        )
        return release

    def authenticate(self) -> str:
        """Get a Last.fm session key.

        A key stored by the ``auth`` command is preferred; otherwise the
        configured username and password are exchanged for a mobile session.

        Returns:
            Session key

        Raises:
            AuthenticationFailedError: If Last.fm refuses the credentials
        """
        stored = read_session_key(self.settings.lastfm.session_path)
        if stored:
            self.logger.info("Using stored Last.fm session key")
            return stored

        self.logger.info("Authenticating with Last.fm")
        session_key = self.lastfm.get_mobile_session(
            self.credentials.lastfm_username,
            self.credentials.lastfm_password
        )
        if not session_key:
            raise AuthenticationFailedError("Last.fm returned an empty session key")
        return session_key

    def scrobble_release(
        self,
        release: Release,
        session_key: Optional[str] = None,
        dry_run: bool = False,
        delay_ms: Optional[int] = None,
        now: Optional[int] = None
    ) -> ScrobbleReport:
        """Scrobble a release and record the session in the history log.

        Dry runs are not recorded.

        Args:
            release: Release to scrobble (artist may already be corrected)
            session_key: Last.fm session key (obtained via authenticate() if omitted)
            dry_run: Compute the schedule without submitting anything
            delay_ms: Override for the pause between submissions
            now: Reference Unix time (defaults to the current time)

        Returns:
            ScrobbleReport for the session

        Raises:
            AuthenticationFailedError: If no session key can be obtained
        """
        if not dry_run and session_key is None:
            session_key = self.authenticate()

        report = self.scrobbler.run(
            artist=release.artist,
            album=release.title,
            tracks=release.tracks,
            session_key=session_key or '',
            dry_run=dry_run,
            delay_ms=delay_ms,
            now=now
        )

        if dry_run:
            self.logger.info("Dry run, session not written to the scrobble log")
            return report

        record = SessionRecord.from_report(
            artist=release.artist,
            album=release.title,
            url=release.url,
            release_id=release.release_id,
            tracks=self.scrobbler.normalize(release.tracks),
            report=report
        )
        self.history.append(record)

        return report
