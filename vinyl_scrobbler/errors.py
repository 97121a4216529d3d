"""Exceptions raised by Vinyl Scrobbler."""

from typing import Iterable


class VinylScrobblerError(Exception):
    """Base class for all Vinyl Scrobbler errors."""


class ConfigurationMissingError(VinylScrobblerError):
    """Required credentials are not present in the environment."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing required configuration: {', '.join(self.missing)}"
        )


class AuthenticationFailedError(VinylScrobblerError):
    """Last.fm did not hand out a session key."""


class ReleaseFetchFailedError(VinylScrobblerError):
    """The Discogs release could not be retrieved or has no tracks."""


class SubmissionFailedError(VinylScrobblerError):
    """A single scrobble was rejected or never reached Last.fm."""

    def __init__(self, reason: str, track: str = ""):
        self.reason = reason
        self.track = track
        super().__init__(f"{track}: {reason}" if track else reason)


class LogWriteFailedError(VinylScrobblerError):
    """The scrobble history file could not be written."""
