"""Last.fm API client: authentication and scrobble submission."""

import logging
from typing import Any, Dict, Optional

import requests

from ..errors import AuthenticationFailedError, SubmissionFailedError
from ..models.scrobble import ScrobbleEntry
from .signing import signed

API_URL = "https://ws.audioscrobbler.com/2.0/"
AUTH_URL = "https://www.last.fm/api/auth/"


class LastfmError(Exception):
    """Raised when Last.fm cannot be reached or reports an error."""

    def __init__(self, message: str, code: Optional[int] = None):
        self.code = code
        super().__init__(message)


class LastfmClient:
    """Minimal Last.fm web service client."""

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        logger: Optional[logging.Logger] = None,
        api_url: str = API_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None
    ):
        """Initialize the client.

        Args:
            api_key: Last.fm API key
            api_secret: Last.fm shared secret used for signing
            logger: Logger instance
            api_url: Web service root URL
            timeout: Request timeout in seconds
            session: HTTP session to reuse (a new one is created if omitted)
        """
        self.api_key = api_key
        self.api_secret = api_secret
        self.logger = logger or logging.getLogger(__name__)
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def call(
        self,
        method: str,
        params: Optional[Dict[str, Any]] = None,
        sign: bool = True,
        http_method: str = "POST"
    ) -> Dict[str, Any]:
        """Call a Last.fm API method.

        ``format`` is added after signing since Last.fm leaves it out of the
        signature.

        Args:
            method: API method name, e.g. ``track.scrobble``
            params: Method parameters
            sign: Whether to attach ``api_sig``
            http_method: ``GET`` or ``POST``

        Returns:
            Decoded JSON response

        Raises:
            LastfmError: On transport failures, bad responses or API errors
        """
        request_params = {'method': method, 'api_key': self.api_key, **(params or {})}
        if sign:
            request_params = signed(request_params, self.api_secret)
        request_params['format'] = 'json'

        self.logger.debug(f"Calling Last.fm {method}")

        try:
            if http_method == "GET":
                response = self.session.get(
                    self.api_url, params=request_params, timeout=self.timeout
                )
            else:
                response = self.session.post(
                    self.api_url, data=request_params, timeout=self.timeout
                )
        except requests.RequestException as e:
            raise LastfmError(f"Request to Last.fm failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise LastfmError(
                f"Invalid response from Last.fm (HTTP {response.status_code})"
            ) from e

        if isinstance(payload, dict) and 'error' in payload:
            raise LastfmError(
                payload.get('message', 'Unknown error'),
                code=payload.get('error')
            )

        if not response.ok:
            raise LastfmError(f"Last.fm returned HTTP {response.status_code}")

        if not isinstance(payload, dict):
            raise LastfmError(
                f"Unexpected response from Last.fm: {type(payload).__name__} instead of an object"
            )

        return payload

    def get_mobile_session(self, username: str, password: str) -> str:
        """Authenticate with username and password.

        Args:
            username: Last.fm username
            password: Last.fm password

        Returns:
            Session key

        Raises:
            AuthenticationFailedError: If no session key was issued
        """
        try:
            data = self.call(
                'auth.getMobileSession',
                {'username': username, 'password': password}
            )
        except LastfmError as e:
            raise AuthenticationFailedError(f"Last.fm login failed: {e}") from e

        return self._session_key(data)

    def get_token(self) -> str:
        """Request an unauthorized token for the web authorization flow.

        Returns:
            Token string

        Raises:
            AuthenticationFailedError: If no token was issued
        """
        try:
            data = self.call('auth.getToken', sign=False, http_method="GET")
        except LastfmError as e:
            raise AuthenticationFailedError(f"Could not obtain token: {e}") from e

        token = data.get('token')
        if not token:
            raise AuthenticationFailedError("Last.fm response did not contain a token")
        return token

    def authorization_url(self, token: str) -> str:
        """URL the user must visit to authorize ``token``."""
        return f"{AUTH_URL}?api_key={self.api_key}&token={token}"

    def get_session(self, token: str) -> str:
        """Exchange an authorized token for a session key.

        Args:
            token: Token previously returned by get_token and authorized by the user

        Returns:
            Session key

        Raises:
            AuthenticationFailedError: If no session key was issued
        """
        try:
            data = self.call('auth.getSession', {'token': token}, http_method="GET")
        except LastfmError as e:
            raise AuthenticationFailedError(f"Could not obtain session: {e}") from e

        return self._session_key(data)

    def scrobble(self, entry: ScrobbleEntry, session_key: str) -> Dict[str, Any]:
        """Submit a single scrobble.

        Args:
            entry: Scrobble to submit
            session_key: Authenticated session key

        Returns:
            Decoded Last.fm response

        Raises:
            SubmissionFailedError: If the scrobble was not accepted
        """
        params = entry.to_params()
        params['sk'] = session_key

        try:
            data = self.call('track.scrobble', params)
        except LastfmError as e:
            raise SubmissionFailedError(str(e), track=entry.track) from e

        scrobbles = data.get('scrobbles')
        attr = scrobbles.get('@attr') if isinstance(scrobbles, dict) else None
        if not isinstance(attr, dict):
            raise SubmissionFailedError(
                "Unexpected response from Last.fm: missing scrobble summary",
                track=entry.track
            )

        try:
            ignored = int(attr.get('ignored', 0) or 0)
        except (TypeError, ValueError):
            raise SubmissionFailedError(
                f"Unexpected ignored count from Last.fm: {attr.get('ignored')!r}",
                track=entry.track
            )

        if ignored > 0:
            raise SubmissionFailedError(
                f"Scrobble ignored by Last.fm: {self._ignored_message(scrobbles)}",
                track=entry.track
            )

        return data

    @staticmethod
    def _session_key(data: Dict[str, Any]) -> str:
        session = data.get('session')
        key = session.get('key') if isinstance(session, dict) else None
        if not key:
            raise AuthenticationFailedError("Last.fm response did not contain a session key")
        return key

    @staticmethod
    def _ignored_message(scrobbles: Dict[str, Any]) -> str:
        scrobble = scrobbles.get('scrobble') or {}
        if isinstance(scrobble, list):
            scrobble = scrobble[0] if scrobble else {}
        message = scrobble.get('ignoredMessage') if isinstance(scrobble, dict) else None
        if not isinstance(message, dict):
            return "no reason given"
        return message.get('#text') or f"code {message.get('code', 'unknown')}"
