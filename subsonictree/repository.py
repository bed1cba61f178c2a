#!/usr/bin/env python3

from concurrent.futures import Future
from typing import Any, Callable, Optional, Protocol
from subsonictree.client import ERROR_NOT_FOUND, SubsonicAPIError, SubsonicClient
from subsonictree.constants import ALBUM_LIST_MODES, BEST_OF_LIMIT, RADIO_ID
from subsonictree.errors import BadValueError, BrowseError, DataSourceError
from subsonictree.processor import NodeProcessor
from subsonictree.thread_manager import ThreadManager, failed_future
import logging
import random
import requests
import traceback


class DataSource(Protocol):
    """Asynchronous catalog queries the browser tree delegates to.

    Every method returns a future resolving to a list of nodes, except
    ``resolve_item`` which resolves to a single node.
    """

    def albums_by_mode(self, parent_id: str, mode: str, limit: int) -> Future: ...

    def starred_artists(self, parent_id: str, best_of_only: bool) -> Future: ...

    def starred_songs(self, parent_id: str) -> Future: ...

    def starred_albums(self, parent_id: str) -> Future: ...

    def music_folders(self, parent_id: str) -> Future: ...

    def playlists(self, parent_id: str) -> Future: ...

    def newest_podcast_episodes(self, parent_id: str, limit: int) -> Future: ...

    def internet_radio_stations(self, parent_id: str) -> Future: ...

    def album_tracks(self, album_key: str) -> Future: ...

    def resolve_item(self, item_id: str) -> Future: ...


class SubsonicRepository:
    """Data source answering catalog queries from a Subsonic server.

    Each query runs on the thread manager's ``api`` pool; the returned future
    resolves to nodes or fails with a BrowseError.
    """

    def __init__(
        self,
        client: SubsonicClient,
        processor: NodeProcessor,
        thread_manager: ThreadManager,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the repository.

        Args:
            client: Subsonic API client
            processor: Node processor mapping responses to nodes
            thread_manager: Thread manager running the calls
            logger: Logger instance
        """
        self.client = client
        self.processor = processor
        self.thread_manager = thread_manager
        self.logger = logger or logging.getLogger("SubsonicTree")

    def _submit(self, description: str, fetch: Callable[[], Any]) -> Future:
        """Run ``fetch`` on the api pool with errors translated to BrowseErrors."""

        def run():
            try:
                result = fetch()
            except BrowseError:
                raise
            except SubsonicAPIError as e:
                if e.code == ERROR_NOT_FOUND:
                    raise BadValueError(f"{description}: {e.message}") from e
                raise DataSourceError(f"{description} failed: {e}") from e
            except (requests.RequestException, KeyError, TypeError, ValueError) as e:
                self.logger.error(f"{description} failed: {e}")
                self.logger.error(traceback.format_exc())
                raise DataSourceError(f"{description} failed: {e}") from e

            if isinstance(result, list):
                self.logger.debug(f"{description} returned {len(result)} nodes")
            return result

        return self.thread_manager.submit_task("api", run)

    def albums_by_mode(self, parent_id: str, mode: str, limit: int) -> Future:
        if mode not in ALBUM_LIST_MODES:
            return failed_future(BadValueError(f"Unsupported album list mode: {mode}"))

        def fetch():
            albums = self.client.get_album_list2(mode, size=limit)
            return self.processor.process(
                albums, lambda album: self.processor.album_node(album, parent_id)
            )

        return self._submit(f"albums ({mode}) for {parent_id}", fetch)

    def starred_artists(self, parent_id: str, best_of_only: bool) -> Future:
        """List starred artists; ``best_of_only`` keeps a random handful."""

        def fetch():
            artists = self.processor.as_list(self.client.get_starred2()["artist"])
            if best_of_only:
                artists = random.sample(artists, min(len(artists), BEST_OF_LIMIT))
            return self.processor.process(
                artists, lambda artist: self.processor.artist_node(artist, parent_id)
            )

        return self._submit(f"starred artists for {parent_id}", fetch)

    def starred_songs(self, parent_id: str) -> Future:
        def fetch():
            songs = self.client.get_starred2()["song"]
            return self.processor.process(songs, self.processor.song_node)

        return self._submit(f"starred songs for {parent_id}", fetch)

    def starred_albums(self, parent_id: str) -> Future:
        def fetch():
            albums = self.client.get_starred2()["album"]
            return self.processor.process(
                albums, lambda album: self.processor.album_node(album, parent_id)
            )

        return self._submit(f"starred albums for {parent_id}", fetch)

    def music_folders(self, parent_id: str) -> Future:
        def fetch():
            folders = self.client.get_music_folders()
            return self.processor.process(
                folders, lambda folder: self.processor.folder_node(folder, parent_id)
            )

        return self._submit(f"music folders for {parent_id}", fetch)

    def playlists(self, parent_id: str) -> Future:
        def fetch():
            playlists = self.client.get_playlists()
            return self.processor.process(
                playlists,
                lambda playlist: self.processor.playlist_node(playlist, parent_id),
            )

        return self._submit(f"playlists for {parent_id}", fetch)

    def newest_podcast_episodes(self, parent_id: str, limit: int) -> Future:
        def fetch():
            episodes = self.client.get_newest_podcasts(count=limit)
            return self.processor.process(
                episodes, self.processor.podcast_episode_node
            )

        return self._submit(f"podcast episodes for {parent_id}", fetch)

    def internet_radio_stations(self, parent_id: str) -> Future:
        def fetch():
            stations = self.client.get_internet_radio_stations()
            return self.processor.process(stations, self.processor.radio_station_node)

        return self._submit(f"radio stations for {parent_id}", fetch)

    def album_tracks(self, album_key: str) -> Future:
        def fetch():
            album = self.client.get_album(album_key)
            if not album:
                raise BadValueError(f"Album {album_key} not found", album_key)
            return self.processor.process(
                album.get("song", []), self.processor.song_node
            )

        return self._submit(f"tracks of album {album_key}", fetch)

    def resolve_item(self, item_id: str) -> Future:
        """Resolve a song, podcast episode or radio station by node id."""
        decoded = self.processor.codec.decode(item_id)
        if decoded is not None and decoded[0] == RADIO_ID:
            return self._resolve_station(item_id, decoded[1])

        def fetch():
            song = self.client.get_song(item_id)
            if not song:
                raise BadValueError(f"Item {item_id} not found", item_id)
            return self.processor.song_node(song)

        return self._submit(f"item {item_id}", fetch)

    def _resolve_station(self, item_id: str, station_id: str) -> Future:
        def fetch():
            stations = self.processor.as_list(self.client.get_internet_radio_stations())
            for station in stations:
                if isinstance(station, dict) and str(station.get("id")) == station_id:
                    node = self.processor.radio_station_node(station)
                    if node is not None:
                        return node
            raise BadValueError(f"Radio station {station_id} not found", item_id)

        return self._submit(f"radio station {station_id}", fetch)
