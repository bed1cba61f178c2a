#!/usr/bin/env python3

from concurrent.futures import Future
from typing import Any, Callable, Optional
from subsonictree.dispatcher import invoke_data_source
from subsonictree.errors import BadValueError
from subsonictree.registry import NodeRegistry
from subsonictree.thread_manager import completed_future, failed_future
import logging


class ItemResolver:
    """Resolves a single id to its node metadata."""

    def __init__(
        self,
        registry: NodeRegistry,
        data_source_getter: Callable[[], Any],
        logger: Optional[logging.Logger] = None,
    ):
        self.registry = registry
        self._data_source_getter = data_source_getter
        self.logger = logger or logging.getLogger("SubsonicTree")

    def get_item(self, node_id: str) -> Future:
        """Return a future resolving to the node named by ``node_id``.

        Static nodes come straight from the registry; anything else is looked
        up through the data source.
        """
        if not node_id:
            return failed_future(BadValueError("Empty media id", node_id))

        node = self.registry.get(node_id)
        if node is not None:
            return completed_future(node)

        self.logger.debug(f"Resolving item {node_id} through the data source")
        return invoke_data_source(
            lambda: self._data_source_getter().resolve_item(node_id),
            node_id,
            self.logger,
        )
