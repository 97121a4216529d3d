import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import requests

from vinyl_scrobbler.config.settings import Credentials, Settings
from vinyl_scrobbler.errors import SubmissionFailedError
from vinyl_scrobbler.models.release import Release
from vinyl_scrobbler.models.scrobble import ScrobbleEntry
from vinyl_scrobbler.models.track import Track


@pytest.fixture(autouse=True)
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "config"
    monkeypatch.setenv("VINYL_SCROBBLER_HOME", str(path))
    for var in (
        "LASTFM_API_KEY",
        "LASTFM_API_SECRET",
        "LASTFM_USERNAME",
        "LASTFM_PASSWORD",
        "DISCOGS_USER_TOKEN",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return path


@pytest.fixture(autouse=True)
def reset_app_logger() -> Iterator[None]:
    yield
    app_logger = logging.getLogger("vinyl_scrobbler")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)


@pytest.fixture()
def logger() -> logging.Logger:
    log = logging.getLogger("vinyl_scrobbler_test")
    log.setLevel(logging.DEBUG)
    return log


@pytest.fixture()
def credentials() -> Credentials:
    return Credentials(
        lastfm_api_key="key",
        lastfm_api_secret="secret",
        lastfm_username="listener",
        lastfm_password="hunter2",
        discogs_token="discogs-token",
    )


@pytest.fixture()
def settings(config_dir: Path) -> Settings:
    settings = Settings()
    settings.scrobble.delay_ms = 0
    return settings


class FakeLastfm:
    """Records scrobbles and fails for selected track titles."""

    def __init__(self, fail_titles: Optional[List[str]] = None, session_key: str = "sk-mobile"):
        self.fail_titles = set(fail_titles or [])
        self.session_key = session_key
        self.submitted: List[ScrobbleEntry] = []
        self.logins: List[tuple] = []

    def scrobble(self, entry: ScrobbleEntry, session_key: str) -> Dict[str, Any]:
        self.submitted.append(entry)
        if entry.track in self.fail_titles:
            raise SubmissionFailedError("connection reset", track=entry.track)
        return {"scrobbles": {"@attr": {"accepted": 1, "ignored": 0}}}

    def get_mobile_session(self, username: str, password: str) -> str:
        self.logins.append((username, password))
        return self.session_key


class FakeDiscogs:
    def __init__(self, release: Release):
        self.release = release
        self.requested: List[str] = []

    def get_release(self, url_or_id: str) -> Release:
        self.requested.append(url_or_id)
        return self.release


@pytest.fixture()
def fake_lastfm() -> FakeLastfm:
    return FakeLastfm()


@pytest.fixture()
def release() -> Release:
    return Release(
        release_id="1234",
        artist="Boards of Canada",
        title="Music Has the Right to Children",
        tracks=[
            Track(title="Wildlife Analysis", position="A1", raw_duration="1:17"),
            Track(title="An Eagle in Your Mind", position="A2", raw_duration="6:23"),
            Track(title="The Color of the Fire", position="A3", raw_duration=None),
        ],
        url="https://www.discogs.com/release/1234",
        year=1998,
    )


@pytest.fixture()
def fake_discogs(release: Release) -> FakeDiscogs:
    return FakeDiscogs(release)


@pytest.fixture()
def sleeps() -> List[float]:
    return []


def make_response(payload: Any, status_code: int = 200) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.url = "https://example.invalid/"
    if isinstance(payload, (bytes, str)):
        response._content = payload.encode() if isinstance(payload, str) else payload
    else:
        response._content = json.dumps(payload).encode()
    return response


class FakeHTTPSession:
    """Stand-in for requests.Session returning queued responses."""

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []
        self.headers: Dict[str, str] = {}

    def _next(self, **call: Any) -> requests.Response:
        self.calls.append(call)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        return self._next(method="GET", url=url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> requests.Response:
        return self._next(method="POST", url=url, **kwargs)


@pytest.fixture()
def http_session() -> Iterator[FakeHTTPSession]:
    yield FakeHTTPSession()
