"""Append-only scrobble history stored as a JSON array."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..errors import LogWriteFailedError
from ..models.scrobble import SessionRecord


class ScrobbleHistory:
    """JSON file recording every completed scrobble session."""

    def __init__(self, path: Path, logger: logging.Logger):
        """Initialize history handler.

        Args:
            path: Path to the JSON log file
            logger: Logger instance
        """
        self.path = path
        self.logger = logger

    def entries(self) -> List[Dict[str, Any]]:
        """Load all logged sessions, oldest first.

        Reading never modifies the file. Unreadable or malformed contents are
        reported as a warning and treated as an empty log.

        Returns:
            List of session dictionaries
        """
        try:
            data, problem = self._read()
        except OSError as e:
            self.logger.warning(f"Could not read scrobble log {self.path}: {e}")
            return []

        if problem:
            self.logger.warning(f"Scrobble log {self.path} {problem}, ignoring contents")
        return data

    def append(self, record: SessionRecord) -> bool:
        """Add a session to the log.

        Failures are logged and reported through the return value only; a
        scrobble session is never undone because its log entry was lost.

        Args:
            record: Completed session

        Returns:
            True if the record was written
        """
        try:
            self._write(record)
        except LogWriteFailedError as e:
            self.logger.error(str(e))
            return False

        self.logger.info(f"Scrobble session logged to {self.path}")
        return True

    def _read(self) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        if not self.path.exists():
            return [], None

        with open(self.path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                return [], f"is corrupt ({e})"

        if not isinstance(data, list):
            return [], f"holds a {type(data).__name__} instead of a list"

        return data, None

    def _write(self, record: SessionRecord) -> None:
        try:
            data, problem = self._read()
            if problem:
                # Unusable contents are kept beside the new log, never overwritten
                backup = self.path.with_name(self.path.name + '.bak')
                self.logger.warning(f"Scrobble log {self.path} {problem}, moving it to {backup}")
                self.path.replace(backup)

            data.append(record.to_dict())

            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + '.tmp')
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            raise LogWriteFailedError(f"Failed to write scrobble log {self.path}: {e}") from e
