"""Platform-specific locations."""

import os
import sys
from pathlib import Path

APP_DIR_NAME = 'vinyl-scrobbler'
CONFIG_DIR_ENV = 'VINYL_SCROBBLER_HOME'


def is_windows() -> bool:
    """Check if running on Windows."""
    return sys.platform == 'win32' or os.name == 'nt'


def is_macos() -> bool:
    """Check if running on macOS."""
    return sys.platform == 'darwin'


def get_config_dir() -> Path:
    """Get the configuration directory, creating it if needed.

    ``VINYL_SCROBBLER_HOME`` overrides the platform default.

    Returns:
        Path: Configuration directory path
            - Windows: %APPDATA%/vinyl-scrobbler
            - macOS: ~/Library/Application Support/vinyl-scrobbler
            - Linux: $XDG_CONFIG_HOME/vinyl-scrobbler (~/.config by default)
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        config_dir = Path(override).expanduser()
    else:
        if is_windows():
            base = Path(os.environ.get('APPDATA', Path.home()))
        elif is_macos():
            base = Path.home() / 'Library' / 'Application Support'
        else:
            base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))
        config_dir = base / APP_DIR_NAME

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
