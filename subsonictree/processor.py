#!/usr/bin/env python3

from typing import Callable, Dict, Iterable, List, Optional
from subsonictree.constants import RADIO_ID
from subsonictree.identifiers import IdentifierCodec
from subsonictree.node import ContentType, MediaNode
import logging


class NodeProcessor:
    """Turns Subsonic response entries into tree nodes."""

    def __init__(
        self,
        client,
        codec: Optional[IdentifierCodec] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the node processor.

        Args:
            client: SubsonicClient used to build stream and artwork locators.
            codec: Codec used to build compound child ids.
            logger: Optional logger instance. Defaults to a new logger if None.
        """
        self.client = client
        self.codec = codec or IdentifierCodec()
        self.logger = logger or logging.getLogger("NodeProcessor")

    def child_id(self, parent_id: str, entity_id: str) -> str:
        """Return the id a child entity gets when listed under ``parent_id``.

        Children of categories that accept compound ids are addressed through
        their parent so they can be drilled into later; other children keep
        the server's id.
        """
        if self.codec.is_compound_prefix(parent_id):
            return self.codec.encode(parent_id, entity_id)
        return entity_id

    def _artwork(self, entry: Dict) -> Optional[str]:
        cover_art = entry.get("coverArt")
        return self.client.cover_art_url(cover_art) if cover_art else None

    def album_node(self, album: Dict, parent_id: str) -> MediaNode:
        return MediaNode.container(
            node_id=self.child_id(parent_id, str(album["id"])),
            title=album.get("name") or album.get("title") or "Unknown Album",
            content_type=ContentType.ALBUM_FOLDER,
            album=album.get("name"),
            artist=album.get("artist"),
            genre=album.get("genre"),
            artwork_uri=self._artwork(album),
        )

    def artist_node(self, artist: Dict, parent_id: str) -> MediaNode:
        return MediaNode.container(
            node_id=self.child_id(parent_id, str(artist["id"])),
            title=artist.get("name") or "Unknown Artist",
            content_type=ContentType.ARTIST_FOLDER,
            artist=artist.get("name"),
            artwork_uri=self._artwork(artist),
        )

    def folder_node(self, folder: Dict, parent_id: str) -> MediaNode:
        return MediaNode.container(
            node_id=self.child_id(parent_id, str(folder["id"])),
            title=folder.get("name") or "Unknown Folder",
            content_type=ContentType.MIXED_FOLDER,
        )

    def playlist_node(self, playlist: Dict, parent_id: str) -> MediaNode:
        return MediaNode.container(
            node_id=self.child_id(parent_id, str(playlist["id"])),
            title=playlist.get("name") or "Unknown Playlist",
            content_type=ContentType.PLAYLIST_FOLDER,
            artwork_uri=self._artwork(playlist),
        )

    def song_node(self, song: Dict) -> MediaNode:
        song_id = str(song["id"])
        return MediaNode.track(
            node_id=song_id,
            title=song.get("title") or "Unknown Title",
            source_uri=self.client.stream_url(song_id),
            album=song.get("album"),
            artist=song.get("artist"),
            genre=song.get("genre"),
            artwork_uri=self._artwork(song),
        )

    def podcast_episode_node(self, episode: Dict) -> Optional[MediaNode]:
        """Build a playable episode, or None if it has not been downloaded."""
        stream_id = episode.get("streamId")
        if not stream_id:
            self.logger.debug(
                f"Skipping podcast episode {episode.get('id')} without a stream id"
            )
            return None
        return MediaNode.track(
            node_id=str(stream_id),
            title=episode.get("title") or "Unknown Episode",
            source_uri=self.client.stream_url(str(stream_id)),
            album=episode.get("album"),
            artist=episode.get("artist"),
            genre=episode.get("genre"),
            artwork_uri=self._artwork(episode),
        )

    def radio_station_node(self, station: Dict) -> Optional[MediaNode]:
        """Build a playable station, or None if it has no stream url.

        The node id is the station id under the radio category.
        """
        stream_url = station.get("streamUrl")
        if not stream_url:
            self.logger.debug(f"Skipping radio station {station.get('id')} without a stream url")
            return None
        return MediaNode.track(
            node_id=self.child_id(RADIO_ID, str(station["id"])),
            title=station.get("name") or "Unknown Station",
            source_uri=stream_url,
        )

    @staticmethod
    def as_list(entries) -> List:
        """Normalize a response field that may hold one entry, many or none.

        Raises:
            TypeError: If ``entries`` is not a list, tuple, dict or None.
        """
        if entries is None:
            return []
        if isinstance(entries, dict):
            return [entries]
        if isinstance(entries, (list, tuple)):
            return list(entries)
        raise TypeError(f"Expected a list of entries, got {type(entries).__name__}")

    def process(
        self, entries: Iterable[Dict], build: Callable[[Dict], Optional[MediaNode]]
    ) -> List[MediaNode]:
        """Map entries through ``build``, dropping entries it rejects.

        Entries that are not objects or fail to map are logged and skipped.
        """
        nodes = []
        for entry in self.as_list(entries):
            if not entry:
                continue
            if not isinstance(entry, dict):
                self.logger.warning(f"Skipping non-object entry {entry!r}")
                continue
            try:
                node = build(entry)
            except (KeyError, ValueError) as e:
                self.logger.warning(f"Skipping malformed entry {entry!r}: {e}")
                continue
            if node is not None:
                nodes.append(node)
        return nodes
