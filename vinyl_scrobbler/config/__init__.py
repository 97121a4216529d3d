"""Configuration module for Vinyl Scrobbler."""

from .history import ScrobbleHistory
from .settings import Credentials, Settings

__all__ = ["Credentials", "ScrobbleHistory", "Settings"]
