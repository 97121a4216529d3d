import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from vinyl_scrobbler.config.history import ScrobbleHistory
from vinyl_scrobbler.models.scrobble import SessionRecord


def make_record(album: str = "Geogaddi") -> SessionRecord:
    return SessionRecord(
        artist="Boards of Canada",
        album=album,
        url="https://www.discogs.com/release/1",
        release_id="1",
        tracks=[{"position": "A1", "title": "Ready Lets Go", "duration": 60}],
        scrobbled_at=datetime(2024, 5, 1, 20, 30, tzinfo=timezone.utc),
        succeeded=1,
    )


def test_append_creates_file(tmp_path: Path, logger: logging.Logger) -> None:
    path = tmp_path / "logs" / "scrobble_log.json"
    history = ScrobbleHistory(path, logger)

    assert history.append(make_record())

    data = json.loads(path.read_text())
    assert data == [{
        "artist": "Boards of Canada",
        "album": "Geogaddi",
        "url": "https://www.discogs.com/release/1",
        "release_id": "1",
        "tracks": [{"position": "A1", "title": "Ready Lets Go", "duration": 60}],
        "scrobbled_at": "2024-05-01T20:30:00+00:00",
        "succeeded": 1,
        "failed": 0,
    }]


def test_append_keeps_existing_entries(tmp_path: Path, logger: logging.Logger) -> None:
    history = ScrobbleHistory(tmp_path / "log.json", logger)
    history.append(make_record("first"))
    history.append(make_record("second"))

    assert [entry["album"] for entry in history.entries()] == ["first", "second"]


def test_corrupt_log_is_moved_aside(tmp_path: Path, logger: logging.Logger) -> None:
    path = tmp_path / "log.json"
    path.write_text("{not json")
    history = ScrobbleHistory(path, logger)

    assert history.append(make_record())

    assert (tmp_path / "log.json.bak").read_text() == "{not json"
    assert len(history.entries()) == 1


def test_write_failure_is_not_fatal(tmp_path: Path, logger: logging.Logger) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    history = ScrobbleHistory(blocker / "log.json", logger)

    assert history.append(make_record()) is False


def test_entries_missing_file(tmp_path: Path, logger: logging.Logger) -> None:
    assert ScrobbleHistory(tmp_path / "missing.json", logger).entries() == []


def test_non_list_log_is_moved_aside(tmp_path: Path, logger: logging.Logger) -> None:
    path = tmp_path / "log.json"
    path.write_text('{"old": "data"}')
    history = ScrobbleHistory(path, logger)

    assert history.append(make_record())

    assert json.loads((tmp_path / "log.json.bak").read_text()) == {"old": "data"}
    assert [entry["album"] for entry in history.entries()] == ["Geogaddi"]


def test_entries_leaves_corrupt_log_in_place(tmp_path: Path, logger: logging.Logger) -> None:
    path = tmp_path / "log.json"
    path.write_text("{not json")

    assert ScrobbleHistory(path, logger).entries() == []

    assert path.read_text() == "{not json"
    assert not (tmp_path / "log.json.bak").exists()


def test_entries_ignores_non_list_log(tmp_path: Path, logger: logging.Logger) -> None:
    path = tmp_path / "log.json"
    path.write_text('"just a string"')

    assert ScrobbleHistory(path, logger).entries() == []
    assert path.read_text() == '"just a string"'


def test_entries_unreadable_log(tmp_path: Path, logger: logging.Logger) -> None:
    # A directory at the log path cannot be opened as a file
    path = tmp_path / "log.json"
    path.mkdir()

    assert ScrobbleHistory(path, logger).entries() == []
