"""Configuration management for Vinyl Scrobbler."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml
from dotenv import load_dotenv

from ..errors import ConfigurationMissingError
from ..utils.platform import get_config_dir

# Environment variable names for each credential
CREDENTIAL_ENV = {
    'lastfm_api_key': 'LASTFM_API_KEY',
    'lastfm_api_secret': 'LASTFM_API_SECRET',
    'lastfm_username': 'LASTFM_USERNAME',
    'lastfm_password': 'LASTFM_PASSWORD',
    'discogs_token': 'DISCOGS_USER_TOKEN',
}


def _as_path(value) -> Optional[Path]:
    if value is None:
        return None
    return Path(value).expanduser()


@dataclass
class LastfmConfig:
    """Last.fm API configuration."""

    api_url: str = "https://ws.audioscrobbler.com/2.0/"
    timeout: float = 10.0
    session_path: Optional[Path] = None

    def __post_init__(self):
        """Set default session key path if not specified."""
        self.session_path = _as_path(self.session_path) or get_config_dir() / 'lastfm_session'
        if self.timeout <= 0:
            raise ValueError("lastfm.timeout must be > 0")


@dataclass
class DiscogsConfig:
    """Discogs API configuration."""

    api_url: str = "https://api.discogs.com"
    user_agent: str = "VinylScrobbler/1.0"
    timeout: float = 10.0

    def __post_init__(self):
        """Validate configuration."""
        if not self.user_agent:
            raise ValueError("discogs.user_agent must not be empty")
        if self.timeout <= 0:
            raise ValueError("discogs.timeout must be > 0")


@dataclass
class ScrobbleConfig:
    """Scrobble submission configuration."""

    delay_ms: int = 1000
    default_duration: int = 180
    min_duration: int = 30

    def __post_init__(self):
        """Validate configuration."""
        if self.delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        if self.min_duration < 1:
            raise ValueError("min_duration must be >= 1 second")
        if self.default_duration < 1:
            raise ValueError("default_duration must be >= 1 second")


@dataclass
class HistoryConfig:
    """Scrobble history log configuration."""

    path: Optional[Path] = None

    def __post_init__(self):
        """Set default history path if not specified."""
        self.path = _as_path(self.path) or get_config_dir() / 'scrobble_log.json'


@dataclass
class LoggingConfig:
    """Logging configuration."""

    path: Optional[Path] = None
    level: str = "INFO"
    max_size_mb: int = 5
    backup_count: int = 3

    def __post_init__(self):
        """Validate configuration and set defaults."""
        self.path = _as_path(self.path) or get_config_dir() / 'vinyl-scrobbler.log'

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.level.upper() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}")


@dataclass
class Settings:
    """Main settings container."""

    lastfm: LastfmConfig = field(default_factory=LastfmConfig)
    discogs: DiscogsConfig = field(default_factory=DiscogsConfig)
    scrobble: ScrobbleConfig = field(default_factory=ScrobbleConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> 'Settings':
        """Load settings from YAML file.

        Args:
            config_path: Path to configuration file

        Returns:
            Settings instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        return cls(
            lastfm=LastfmConfig(**(data.get('lastfm') or {})),
            discogs=DiscogsConfig(**(data.get('discogs') or {})),
            scrobble=ScrobbleConfig(**(data.get('scrobble') or {})),
            history=HistoryConfig(**(data.get('history') or {})),
            logging=LoggingConfig(**(data.get('logging') or {})),
        )

    @classmethod
    def from_file_or_default(cls, config_path: Optional[Path] = None) -> 'Settings':
        """Load settings from file or return defaults.

        Args:
            config_path: Path to configuration file (optional)

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = get_config_dir() / 'config.yaml'

        if config_path.exists():
            try:
                return cls.from_file(config_path)
            except (TypeError, ValueError, yaml.YAMLError) as e:
                logging.warning(f"Failed to load config from {config_path}: {e}")
                logging.warning("Using default configuration")
                return cls()
        else:
            logging.info(f"Config file not found at {config_path}, using defaults")
            return cls()

    def to_dict(self) -> Dict[str, Dict]:
        """Convert to a plain dictionary for YAML serialization."""
        return {
            'lastfm': {
                'api_url': self.lastfm.api_url,
                'timeout': self.lastfm.timeout,
                'session_path': str(self.lastfm.session_path)
            },
            'discogs': {
                'api_url': self.discogs.api_url,
                'user_agent': self.discogs.user_agent,
                'timeout': self.discogs.timeout
            },
            'scrobble': {
                'delay_ms': self.scrobble.delay_ms,
                'default_duration': self.scrobble.default_duration,
                'min_duration': self.scrobble.min_duration
            },
            'history': {
                'path': str(self.history.path)
            },
            'logging': {
                'path': str(self.logging.path),
                'level': self.logging.level,
                'max_size_mb': self.logging.max_size_mb,
                'backup_count': self.logging.backup_count
            }
        }

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save settings to YAML file.

        Args:
            config_path: Path to save configuration (default: config.yaml in config dir)
        """
        if config_path is None:
            config_path = get_config_dir() / 'config.yaml'

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False, indent=2)


@dataclass(frozen=True)
class Credentials:
    """Secrets read from the environment once at startup."""

    lastfm_api_key: Optional[str] = None
    lastfm_api_secret: Optional[str] = None
    lastfm_username: Optional[str] = None
    lastfm_password: Optional[str] = None
    discogs_token: Optional[str] = None

    @classmethod
    def from_env(
        cls,
        env_file: Optional[Path] = None,
        environ: Optional[Dict[str, str]] = None
    ) -> 'Credentials':
        """Read credentials from the environment.

        ``.env`` files in the working directory and in the config directory
        are loaded first; variables already set in the environment win.

        Args:
            env_file: Extra .env file to load before the defaults
            environ: Mapping to read instead of os.environ (no .env loading)

        Returns:
            Credentials instance
        """
        if environ is None:
            if env_file is not None:
                load_dotenv(dotenv_path=env_file, override=False)
            load_dotenv(dotenv_path=Path.cwd() / '.env', override=False)
            load_dotenv(dotenv_path=get_config_dir() / '.env', override=False)
            environ = os.environ

        values = {}
        for attr, var in CREDENTIAL_ENV.items():
            value = (environ.get(var) or '').strip()
            values[attr] = value or None
        return cls(**values)

    def require(self, *names: str) -> None:
        """Ensure the given credentials are present.

        Args:
            names: Attribute names (all credentials when omitted)

        Raises:
            ConfigurationMissingError: Listing every missing environment variable
        """
        names = names or tuple(CREDENTIAL_ENV)
        missing = [CREDENTIAL_ENV[name] for name in names if not getattr(self, name)]
        if missing:
            raise ConfigurationMissingError(missing)
