#!/usr/bin/env python3

"""Value types describing entries of the media browser tree."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ContentType(str, Enum):
    """Media type tag attached to every node."""

    MIXED_FOLDER = "mixed-folder"
    ALBUM_FOLDER = "album-folder"
    PLAYLIST_FOLDER = "playlist-folder"
    ARTIST_FOLDER = "artist-folder"
    PODCAST_FOLDER = "podcast-folder"
    RADIO_FOLDER = "radio-folder"
    MUSIC_TRACK = "music-track"


@dataclass(frozen=True)
class MediaNode:
    """A single browsable container or playable item.

    Containers are browsable, not playable and carry no source locator.
    Leaf items are playable, not browsable and always carry one.
    """

    node_id: str
    title: str
    playable: bool
    browsable: bool
    content_type: ContentType
    album: Optional[str] = None
    artist: Optional[str] = None
    genre: Optional[str] = None
    source_uri: Optional[str] = None
    artwork_uri: Optional[str] = None

    def __post_init__(self):
        if not self.node_id:
            raise ValueError("MediaNode requires a non-empty node_id")
        if self.playable == self.browsable:
            raise ValueError(
                f"Node {self.node_id} must be either a container or a playable item"
            )
        if self.playable and not self.source_uri:
            raise ValueError(f"Playable node {self.node_id} has no source_uri")
        if self.browsable and self.source_uri:
            raise ValueError(f"Container node {self.node_id} cannot have a source_uri")

    @property
    def is_container(self) -> bool:
        return self.browsable

    @classmethod
    def container(
        cls,
        node_id: str,
        title: str,
        content_type: ContentType = ContentType.MIXED_FOLDER,
        **kwargs,
    ) -> "MediaNode":
        """Build a browsable, non-playable node."""
        return cls(
            node_id=node_id,
            title=title,
            playable=False,
            browsable=True,
            content_type=content_type,
            **kwargs,
        )

    @classmethod
    def track(
        cls,
        node_id: str,
        title: str,
        source_uri: str,
        content_type: ContentType = ContentType.MUSIC_TRACK,
        **kwargs,
    ) -> "MediaNode":
        """Build a playable leaf node."""
        return cls(
            node_id=node_id,
            title=title,
            playable=True,
            browsable=False,
            content_type=content_type,
            source_uri=source_uri,
            **kwargs,
        )
