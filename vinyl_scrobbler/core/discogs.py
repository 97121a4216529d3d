"""Discogs release fetching."""

import logging
import re
from typing import Any, Dict, List, Optional

import requests

from ..errors import ReleaseFetchFailedError
from ..models.release import Release
from ..models.track import Track

API_URL = "https://api.discogs.com"
USER_AGENT = "VinylScrobbler/1.0"

_RELEASE_PATH = re.compile(r'/release/(\d+)')
_DIGITS = re.compile(r'\d+')
# Discogs disambiguates artists sharing a name with a numeric suffix: "Nirvana (2)"
_ARTIST_SUFFIX = re.compile(r'\s+\(\d+\)$')


def extract_release_id(url_or_id: str) -> str:
    """Extract a release ID from a Discogs URL or return the bare ID.

    Args:
        url_or_id: Discogs release URL, ``[r123]`` reference or numeric ID

    Returns:
        Release ID as a string

    Raises:
        ReleaseFetchFailedError: If no ID can be found
    """
    text = url_or_id.strip()

    match = _RELEASE_PATH.search(text)
    if match:
        return match.group(1)

    match = _DIGITS.search(text)
    if match:
        return match.group(0)

    raise ReleaseFetchFailedError(f"Could not find a release ID in: {url_or_id}")


def clean_artist_name(name: str) -> str:
    """Strip the Discogs disambiguation suffix from an artist name."""
    return _ARTIST_SUFFIX.sub('', name.strip())


def parse_tracklist(tracklist: List[Dict[str, Any]]) -> List[Track]:
    """Convert a Discogs tracklist to Track objects.

    Headings are dropped and index tracks are replaced by their sub-tracks.

    Args:
        tracklist: ``tracklist`` array of a Discogs release

    Returns:
        Tracks in play order
    """
    tracks = []

    for item in tracklist:
        kind = item.get('type_', 'track')

        if kind == 'index':
            tracks.extend(parse_tracklist(item.get('sub_tracks') or []))
            continue

        if kind != 'track' or not (item.get('title') or '').strip():
            continue

        tracks.append(Track(
            title=item['title'].strip(),
            position=(item.get('position') or '').strip(),
            raw_duration=item.get('duration') or None
        ))

    return tracks


class DiscogsClient:
    """Read-only Discogs database client."""

    def __init__(
        self,
        token: str,
        logger: Optional[logging.Logger] = None,
        api_url: str = API_URL,
        user_agent: str = USER_AGENT,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None
    ):
        """Initialize the client.

        Args:
            token: Discogs personal access token
            logger: Logger instance
            api_url: API root URL
            user_agent: User-Agent header Discogs requires
            timeout: Request timeout in seconds
            session: HTTP session to reuse (a new one is created if omitted)
        """
        self.logger = logger or logging.getLogger(__name__)
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent,
            'Authorization': f"Discogs token={token}",
        })

    def get_release(self, url_or_id: str) -> Release:
        """Fetch a release and its tracklist.

        Args:
            url_or_id: Discogs release URL or ID

        Returns:
            Release instance

        Raises:
            ReleaseFetchFailedError: If the release cannot be fetched or has no tracks
        """
        release_id = extract_release_id(url_or_id)
        url = f"{self.api_url}/releases/{release_id}"

        self.logger.debug(f"Fetching Discogs release {release_id}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.HTTPError as e:
            raise ReleaseFetchFailedError(
                f"Discogs returned HTTP {e.response.status_code} for release {release_id}"
            ) from e
        except requests.RequestException as e:
            raise ReleaseFetchFailedError(f"Request to Discogs failed: {e}") from e
        except ValueError as e:
            raise ReleaseFetchFailedError(
                f"Invalid response from Discogs for release {release_id}"
            ) from e

        return self._build_release(release_id, data, url_or_id)

    def _build_release(
        self,
        release_id: str,
        data: Dict[str, Any],
        source: str
    ) -> Release:
        artists = data.get('artists') or []
        title = data.get('title')

        if not artists or not artists[0].get('name') or not title:
            raise ReleaseFetchFailedError(
                f"Release {release_id} is missing artist or title information"
            )

        tracks = parse_tracklist(data.get('tracklist') or [])
        if not tracks:
            raise ReleaseFetchFailedError(f"Release {release_id} has no tracks")

        images = data.get('images') or []
        thumbnail = images[0].get('uri150') if images else None

        return Release(
            release_id=release_id,
            artist=clean_artist_name(artists[0]['name']),
            title=title,
            tracks=tracks,
            url=data.get('uri') or source,
            year=data.get('year') or None,
            thumbnail_url=thumbnail or data.get('thumb') or None
        )
