#!/usr/bin/env python3

from typing import Dict, Iterable, Optional
from subsonictree.constants import CATEGORY_DEFINITIONS, ROOT_ID, CategoryDefinition
from subsonictree.node import MediaNode
from subsonictree.registry import NodeRegistry
import logging


class TreeBuilder:
    """Builds the fixed three level category hierarchy into a registry."""

    def __init__(
        self,
        link_overrides: Optional[Dict[str, bool]] = None,
        definitions: Iterable[CategoryDefinition] = CATEGORY_DEFINITIONS,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the builder.

        Args:
            link_overrides: Category short names mapped to whether the category
                is attached to its parent, overriding the default linking.
            definitions: Static nodes in build order.
            logger: Optional logger instance.
        """
        self.logger = logger or logging.getLogger("SubsonicTree")
        self.definitions = tuple(definitions)
        self.link_overrides = dict(link_overrides or {})

        by_key = {d.key: d for d in self.definitions}
        for key in self.link_overrides:
            definition = by_key.get(key)
            if definition is None:
                raise ValueError(f"Unknown category: {key}")
            if definition.parent_id in (None, ROOT_ID):
                raise ValueError(f"Category {key} is always linked")

    def is_linked(self, definition: CategoryDefinition) -> bool:
        return self.link_overrides.get(definition.key, definition.linked)

    def build(self, registry: NodeRegistry) -> MediaNode:
        """Register every static node and wire the linked edges.

        Parents are registered before their children, so edges can be wired
        as soon as a child is added.

        Returns:
            The root node.

        Raises:
            RegistryError: If the definitions reference a missing or duplicate node.
        """
        root = None
        for definition in self.definitions:
            node = MediaNode.container(
                node_id=definition.node_id,
                title=definition.title,
                content_type=definition.content_type,
            )
            registry.put(definition.node_id, node)

            if definition.parent_id is None:
                root = node
            elif self.is_linked(definition):
                registry.add_child(definition.parent_id, definition.node_id)
            else:
                self.logger.debug(
                    f"Category {definition.node_id} defined but not linked under "
                    f"{definition.parent_id}"
                )

        if root is None:
            raise ValueError("Tree definitions contain no root node")

        self.logger.info(f"Built media browser tree with {len(registry)} static nodes")
        return root
