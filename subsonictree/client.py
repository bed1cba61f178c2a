#!/usr/bin/env python3

from typing import Any, Dict, List, Optional
from subsonictree.config import ConfigManager
from subsonictree.http_utils import build_auth_params, normalize_base_url, redact_params
import logging
import requests

# Subsonic error code for "the requested data was not found".
ERROR_NOT_FOUND = 70


class SubsonicAPIError(Exception):
    """Error reported by the server inside a ``subsonic-response`` body."""

    def __init__(self, code: int, message: str):
        super().__init__(f"Subsonic error {code}: {message}")
        self.code = code
        self.message = message


class SubsonicClient:
    """Client for interacting with a Subsonic-compatible REST API.

    This class is responsible solely for making API calls and unwrapping the
    response envelope. Mapping responses to tree nodes happens elsewhere.
    """

    def __init__(
        self,
        config: ConfigManager,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the Subsonic API client.

        Args:
            config: Validated configuration holding server url and credentials.
            session: Optional requests session; a new one is created if None.
            logger: Optional logger instance; defaults to a new logger if None.
        """
        self.logger = logger or logging.getLogger("SubsonicClient")
        self.config = config
        self.base_url = normalize_base_url(config.server_url)
        self.timeout = config.timeout
        self.session = session or requests.Session()
        self.logger.info(f"SubsonicClient initialized for {self.base_url}")

    def _auth_params(self) -> Dict[str, str]:
        return build_auth_params(
            self.config.username,
            self.config.password,
            self.config.client_name,
            self.config.api_version,
        )

    def _endpoint_url(self, endpoint: str) -> str:
        return f"{self.base_url}/rest/{endpoint}"

    def _request(self, endpoint: str, **params: Any) -> Dict[str, Any]:
        """Call an endpoint and return the unwrapped ``subsonic-response`` body.

        Raises:
            SubsonicAPIError: If the server reports a failure.
            requests.RequestException: On transport or HTTP errors.
        """
        query = self._auth_params()
        query.update({k: v for k, v in params.items() if v is not None})
        self.logger.debug(f"GET {endpoint} {redact_params(query)}")

        try:
            response = self.session.get(
                self._endpoint_url(endpoint), params=query, timeout=self.timeout
            )
            response.raise_for_status()
            body = response.json().get("subsonic-response")
        except (requests.RequestException, ValueError) as e:
            self.logger.error(f"Request to {endpoint} failed: {e}")
            raise

        if not isinstance(body, dict):
            raise SubsonicAPIError(0, f"Malformed response from {endpoint}")

        if body.get("status") != "ok":
            error = body.get("error") or {}
            code = int(error.get("code", 0))
            message = error.get("message", "Unknown error")
            self.logger.error(f"{endpoint} returned error {code}: {message}")
            raise SubsonicAPIError(code, message)

        return body

    def ping(self) -> bool:
        """Check connectivity and credentials."""
        self._request("ping")
        return True

    def get_album_list2(self, list_type: str, size: int = 100) -> List[Dict]:
        """Fetch albums ordered by ``list_type`` (frequent, recent, newest, ...).

        Args:
            list_type: Album list ordering understood by the server.
            size: Maximum number of albums to retrieve (default: 100).

        Returns:
            List of album dictionaries.
        """
        body = self._request("getAlbumList2", type=list_type, size=size)
        return (body.get("albumList2") or {}).get("album", [])

    def get_starred2(self) -> Dict[str, List[Dict]]:
        """Fetch starred artists, albums and songs.

        Returns:
            Dictionary with ``artist``, ``album`` and ``song`` lists.
        """
        starred = self._request("getStarred2").get("starred2") or {}
        return {
            "artist": starred.get("artist", []),
            "album": starred.get("album", []),
            "song": starred.get("song", []),
        }

    def get_music_folders(self) -> List[Dict]:
        body = self._request("getMusicFolders")
        return (body.get("musicFolders") or {}).get("musicFolder", [])

    def get_playlists(self) -> List[Dict]:
        body = self._request("getPlaylists")
        return (body.get("playlists") or {}).get("playlist", [])

    def get_newest_podcasts(self, count: int = 100) -> List[Dict]:
        """Fetch the most recently published podcast episodes.

        Args:
            count: Maximum number of episodes to retrieve (default: 100).

        Returns:
            List of episode dictionaries.
        """
        body = self._request("getNewestPodcasts", count=count)
        return (body.get("newestPodcasts") or {}).get("episode", [])

    def get_internet_radio_stations(self) -> List[Dict]:
        body = self._request("getInternetRadioStations")
        return (body.get("internetRadioStations") or {}).get(
            "internetRadioStation", []
        )

    def get_album(self, album_id: str) -> Dict:
        """Fetch an album with its songs.

        Args:
            album_id: The album ID.

        Returns:
            Album dictionary whose ``song`` key lists the tracks.
        """
        return self._request("getAlbum", id=album_id).get("album") or {}

    def get_song(self, song_id: str) -> Dict:
        """Fetch a single song's metadata.

        Args:
            song_id: The song ID.

        Returns:
            Song dictionary.
        """
        return self._request("getSong", id=song_id).get("song") or {}

    def _signed_url(self, endpoint: str, **params: Any) -> str:
        query = self._auth_params()
        query.update({k: v for k, v in params.items() if v is not None})
        request = requests.Request("GET", self._endpoint_url(endpoint), params=query)
        return request.prepare().url

    def stream_url(self, item_id: str) -> str:
        """Build the signed streaming locator for a song or episode."""
        return self._signed_url("stream", id=item_id)

    def cover_art_url(self, cover_art_id: str, size: Optional[int] = None) -> str:
        """Build the signed artwork locator for a cover art id."""
        return self._signed_url("getCoverArt", id=cover_art_id, size=size)
