"""Utility modules for Vinyl Scrobbler."""

from .formatting import format_duration, format_timestamp
from .logger import setup_logger
from .platform import get_config_dir, is_windows

__all__ = ["format_duration", "format_timestamp", "setup_logger", "get_config_dir", "is_windows"]
