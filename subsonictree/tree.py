#!/usr/bin/env python3

from concurrent.futures import Future
from typing import Any, Dict, Optional
from subsonictree.constants import CATEGORY_IDS
from subsonictree.dispatcher import ChildResolver
from subsonictree.identifiers import IdentifierCodec
from subsonictree.item_resolver import ItemResolver
from subsonictree.node import MediaNode
from subsonictree.registry import NodeRegistry
from subsonictree.thread_manager import completed_future
from subsonictree.tree_builder import TreeBuilder
import logging
import threading


class MediaBrowserTree:
    """Navigation tree exposed to media browsing clients.

    Each instance owns its registry, so independent trees can coexist. The
    static hierarchy is built by the first call to :meth:`initialize`; later
    calls only swap the data source.
    """

    def __init__(
        self,
        link_overrides: Optional[Dict[str, bool]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize an empty tree.

        Args:
            link_overrides: Category short names mapped to whether they are
                attached to their parent (see TreeBuilder).
            logger: Optional logger instance.
        """
        self.logger = logger or logging.getLogger("SubsonicTree")
        self.registry = NodeRegistry()
        self.builder = TreeBuilder(link_overrides=link_overrides, logger=self.logger)
        self.codec = IdentifierCodec(is_static_container=self._is_static_container)

        self.data_source: Any = None
        self._root: Optional[MediaNode] = None
        self._init_lock = threading.Lock()

        self.children_resolver = ChildResolver(
            registry=self.registry,
            codec=self.codec,
            data_source_getter=lambda: self.data_source,
            logger=self.logger,
        )
        self.children_resolver.register_defaults()
        self.item_resolver = ItemResolver(
            registry=self.registry,
            data_source_getter=lambda: self.data_source,
            logger=self.logger,
        )

    def _is_static_container(self, node_id: str) -> bool:
        return node_id in self.registry and node_id not in CATEGORY_IDS

    def initialize(self, data_source: Any) -> Future:
        """Attach the data source and build the static tree once.

        The data source is replaced on every call. The tree itself is built
        only by the first caller; concurrent first calls wait for it.

        Returns:
            Already resolved future holding the root node.
        """
        self.data_source = data_source

        if self._root is None:
            with self._init_lock:
                if self._root is None:
                    self._root = self.builder.build(self.registry)
                    self.logger.info("Media browser tree initialized")

        return completed_future(self._root)

    def _require_initialized(self) -> None:
        if self._root is None:
            raise RuntimeError("MediaBrowserTree.initialize() must be called first")

    def get_root_item(self) -> MediaNode:
        self._require_initialized()
        return self._root

    def get_children(self, node_id: str, params: Any = None) -> Future:
        """List a node's children; see ChildResolver.get_children.

        Raises:
            RuntimeError: If called before :meth:`initialize`.
        """
        self._require_initialized()
        return self.children_resolver.get_children(node_id, params)

    def get_item(self, node_id: str) -> Future:
        """Resolve one node's metadata; see ItemResolver.get_item.

        Raises:
            RuntimeError: If called before :meth:`initialize`.
        """
        self._require_initialized()
        return self.item_resolver.get_item(node_id)
