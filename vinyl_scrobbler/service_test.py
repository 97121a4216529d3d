import json
import logging
from pathlib import Path
from typing import List

import pytest

from conftest import FakeDiscogs, FakeLastfm
from vinyl_scrobbler.config.settings import Credentials, Settings
from vinyl_scrobbler.errors import ConfigurationMissingError
from vinyl_scrobbler.models.release import Release
from vinyl_scrobbler.service import VinylScrobblerService, read_session_key, write_session_key


@pytest.fixture()
def service(
    settings: Settings,
    credentials: Credentials,
    logger: logging.Logger,
    fake_discogs: FakeDiscogs,
    fake_lastfm: FakeLastfm,
    sleeps: List[float],
) -> VinylScrobblerService:
    return VinylScrobblerService(
        settings=settings,
        credentials=credentials,
        logger=logger,
        discogs=fake_discogs,
        lastfm=fake_lastfm,
        sleep=sleeps.append,
    )


def test_missing_credentials_abort_startup(settings: Settings, logger: logging.Logger) -> None:
    with pytest.raises(ConfigurationMissingError) as excinfo:
        VinylScrobblerService(
            settings=settings,
            credentials=Credentials(lastfm_api_key="key"),
            logger=logger,
        )
    assert "LASTFM_API_SECRET" in str(excinfo.value)


def test_fetch_release(service: VinylScrobblerService, fake_discogs: FakeDiscogs) -> None:
    release = service.fetch_release("1234")
    assert release.title == "Music Has the Right to Children"
    assert fake_discogs.requested == ["1234"]


def test_authenticate_with_mobile_session(service: VinylScrobblerService, fake_lastfm: FakeLastfm) -> None:
    assert service.authenticate() == "sk-mobile"
    assert fake_lastfm.logins == [("listener", "hunter2")]


def test_authenticate_prefers_stored_key(
    service: VinylScrobblerService, settings: Settings, fake_lastfm: FakeLastfm
) -> None:
    write_session_key(settings.lastfm.session_path, "sk-stored")
    assert service.authenticate() == "sk-stored"
    assert fake_lastfm.logins == []


def test_session_key_file(tmp_path: Path) -> None:
    path = tmp_path / "sub" / "session"
    assert read_session_key(path) is None
    write_session_key(path, "abc")
    assert read_session_key(path) == "abc"


def test_scrobble_release_logs_session(
    service: VinylScrobblerService, release: Release, settings: Settings, fake_lastfm: FakeLastfm
) -> None:
    report = service.scrobble_release(release.with_artist("BoC"), now=100000)

    assert report.succeeded == 3
    assert [e.artist for e in fake_lastfm.submitted] == ["BoC"] * 3
    # 1:17, 6:23 and the 3 minute default
    assert [e.timestamp for e in fake_lastfm.submitted] == [
        100000 - (77 + 383 + 180),
        100000 - (383 + 180),
        100000 - 180,
    ]

    log = json.loads(settings.history.path.read_text())
    assert len(log) == 1
    assert log[0]["artist"] == "BoC"
    assert log[0]["album"] == "Music Has the Right to Children"
    assert log[0]["url"] == "https://www.discogs.com/release/1234"
    assert log[0]["succeeded"] == 3
    assert log[0]["failed"] == 0
    assert log[0]["tracks"][0] == {"position": "A1", "title": "Wildlife Analysis", "duration": 77}


def test_scrobble_release_records_failures(
    settings: Settings,
    credentials: Credentials,
    logger: logging.Logger,
    fake_discogs: FakeDiscogs,
    release: Release,
    sleeps: List[float],
) -> None:
    lastfm = FakeLastfm(fail_titles=["An Eagle in Your Mind"])
    service = VinylScrobblerService(
        settings=settings,
        credentials=credentials,
        logger=logger,
        discogs=fake_discogs,
        lastfm=lastfm,
        sleep=sleeps.append,
    )

    report = service.scrobble_release(release, session_key="sk", now=100000)

    assert len(lastfm.submitted) == 3
    assert report.failed == 1
    assert json.loads(settings.history.path.read_text())[0]["failed"] == 1


def test_dry_run_is_not_logged(
    service: VinylScrobblerService, release: Release, settings: Settings, fake_lastfm: FakeLastfm
) -> None:
    report = service.scrobble_release(release, dry_run=True, now=100000)

    assert report.processed == 3
    assert fake_lastfm.submitted == []
    assert fake_lastfm.logins == []
    assert not settings.history.path.exists()


def test_history_failure_does_not_fail_session(
    service: VinylScrobblerService, release: Release, settings: Settings, tmp_path: Path
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    service.history.path = blocker / "log.json"

    report = service.scrobble_release(release, session_key="sk", now=100000)

    assert report.succeeded == 3
