"""Core functionality for Vinyl Scrobbler."""

from .discogs import DiscogsClient
from .duration import normalize_tracks, parse_duration
from .lastfm import LastfmClient
from .scrobbler import Scrobbler
from .signing import sign_params
from .timeline import schedule_timestamps

__all__ = [
    "DiscogsClient",
    "LastfmClient",
    "Scrobbler",
    "normalize_tracks",
    "parse_duration",
    "schedule_timestamps",
    "sign_params",
]
