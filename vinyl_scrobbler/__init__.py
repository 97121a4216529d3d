"""Scrobble vinyl records from Discogs to Last.fm."""

__version__ = "0.1.0"
