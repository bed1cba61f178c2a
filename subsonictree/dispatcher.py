#!/usr/bin/env python3

from concurrent.futures import Future
from typing import Any, Callable, Dict, Optional
from subsonictree.constants import (
    BEST_OF_ID,
    DEFAULT_PAGE_SIZE,
    FOLDER_ID,
    LAST_PLAYED_ID,
    MADE_FOR_YOU_ID,
    MODE_FREQUENT,
    MODE_NEWEST,
    MODE_RECENT,
    MOST_PLAYED_ID,
    PLAYLIST_ID,
    PODCAST_ID,
    RADIO_ID,
    RECENTLY_ADDED_ID,
    STARRED_ALBUMS_ID,
    STARRED_ARTISTS_ID,
    STARRED_TRACKS_ID,
    ALBUM_DRILL_DOWN_PREFIXES,
)
from subsonictree.errors import (
    BadValueError,
    BrowseError,
    DataSourceError,
    UnimplementedError,
)
from subsonictree.identifiers import (
    CategoryId,
    DetailId,
    Identifier,
    IdentifierCodec,
    StaticId,
    UnknownId,
)
from subsonictree.registry import NodeRegistry
from subsonictree.thread_manager import completed_future, failed_future
import logging
import traceback

# handler(data_source, argument) -> Future
SourceHandler = Callable[[Any, str], Future]


def invoke_data_source(
    handler: Callable[[], Future], description: str, logger: logging.Logger
) -> Future:
    """Run a data source call, turning synchronous failures into a failed future."""
    try:
        return handler()
    except BrowseError as e:
        logger.error(f"Data source rejected {description}: {e}")
        return failed_future(e)
    except Exception as e:
        logger.error(f"Data source call failed for {description}: {e}")
        logger.error(traceback.format_exc())
        error = DataSourceError(f"Data source call failed for {description}: {e}")
        error.__cause__ = e
        return failed_future(error)


class ChildResolver:
    """Routes child listings to the static registry or to the data source."""

    def __init__(
        self,
        registry: NodeRegistry,
        codec: IdentifierCodec,
        data_source_getter: Callable[[], Any],
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the resolver with empty handler tables.

        Args:
            registry: Registry holding the static tree.
            codec: Codec used to classify incoming ids.
            data_source_getter: Returns the data source to delegate to.
            logger: Optional logger instance.
        """
        self.registry = registry
        self.codec = codec
        self._data_source_getter = data_source_getter
        self.logger = logger or logging.getLogger("SubsonicTree")

        # Category id -> handler; a category mapped to None has no content yet
        self.category_handlers: Dict[str, Optional[SourceHandler]] = {}
        # Compound prefix -> handler receiving the entity key
        self.detail_handlers: Dict[str, SourceHandler] = {}

        self._variant_handlers: Dict[type, Callable[[Any, Any], Future]] = {
            StaticId: self._static_children,
            CategoryId: self._category_children,
            DetailId: self._detail_children,
            UnknownId: self._unknown_children,
        }

    def register_category(
        self, category_id: str, handler: Optional[SourceHandler]
    ) -> None:
        """Register the data source query answering a category id."""
        self.category_handlers[category_id] = handler

    def register_detail(self, prefix: str, handler: SourceHandler) -> None:
        """Register the data source query answering compound ids under a prefix."""
        if not self.codec.is_compound_prefix(prefix):
            raise ValueError(f"{prefix} is not a compound id prefix")
        self.detail_handlers[prefix] = handler

    def register_defaults(self) -> None:
        """Wire the standard category and drill-down queries."""
        self.register_category(
            MOST_PLAYED_ID,
            lambda source, cid: source.albums_by_mode(cid, MODE_FREQUENT, DEFAULT_PAGE_SIZE),
        )
        self.register_category(
            LAST_PLAYED_ID,
            lambda source, cid: source.albums_by_mode(cid, MODE_RECENT, DEFAULT_PAGE_SIZE),
        )
        self.register_category(
            RECENTLY_ADDED_ID,
            lambda source, cid: source.albums_by_mode(cid, MODE_NEWEST, DEFAULT_PAGE_SIZE),
        )
        self.register_category(
            BEST_OF_ID, lambda source, cid: source.starred_artists(cid, True)
        )
        self.register_category(
            MADE_FOR_YOU_ID, lambda source, cid: source.starred_artists(cid, True)
        )
        self.register_category(
            STARRED_TRACKS_ID, lambda source, cid: source.starred_songs(cid)
        )
        self.register_category(
            STARRED_ALBUMS_ID, lambda source, cid: source.starred_albums(cid)
        )
        self.register_category(
            STARRED_ARTISTS_ID, lambda source, cid: source.starred_artists(cid, False)
        )
        self.register_category(FOLDER_ID, lambda source, cid: source.music_folders(cid))
        self.register_category(PLAYLIST_ID, lambda source, cid: source.playlists(cid))
        self.register_category(
            PODCAST_ID,
            lambda source, cid: source.newest_podcast_episodes(cid, DEFAULT_PAGE_SIZE),
        )
        self.register_category(
            RADIO_ID, lambda source, cid: source.internet_radio_stations(cid)
        )

        for prefix in sorted(ALBUM_DRILL_DOWN_PREFIXES):
            self.register_detail(prefix, lambda source, key: source.album_tracks(key))

    def get_children(self, node_id: str, params: Any = None) -> Future:
        """List the children of a node.

        Args:
            node_id: Id of the node to list.
            params: Opaque browse parameters from the client; not interpreted.

        Returns:
            Future resolving to the ordered list of child nodes, or failing
            with a BrowseError.
        """
        identifier: Identifier = self.codec.classify(node_id)
        self.logger.debug(f"Resolving children of {node_id} as {identifier} ({params})")
        return self._variant_handlers[type(identifier)](identifier, node_id)

    def _static_children(self, identifier: StaticId, node_id: str) -> Future:
        return completed_future(self.registry.children(identifier.node_id))

    def _category_children(self, identifier: CategoryId, node_id: str) -> Future:
        category_id = identifier.category_id
        handler = self.category_handlers.get(category_id)
        if handler is None:
            self.logger.debug(f"Category {category_id} has no content")
            return completed_future([])

        return invoke_data_source(
            lambda: handler(self._data_source_getter(), category_id),
            category_id,
            self.logger,
        )

    def _detail_children(self, identifier: DetailId, node_id: str) -> Future:
        handler = self.detail_handlers.get(identifier.category_id)
        if handler is None:
            self.logger.warning(
                f"No drill-down handler for {identifier.category_id}, cannot list {node_id}"
            )
            return failed_future(
                UnimplementedError(
                    f"Listing entities under {identifier.category_id} is not supported",
                    node_id,
                )
            )

        return invoke_data_source(
            lambda: handler(self._data_source_getter(), identifier.entity_key),
            node_id,
            self.logger,
        )

    def _unknown_children(self, identifier: UnknownId, node_id: str) -> Future:
        self.logger.debug(f"No handler found for {node_id}")
        return failed_future(BadValueError(f"Unknown media id: {node_id}", node_id))
