#!/usr/bin/env python3

from typing import Dict, Iterator, List, Optional
from subsonictree.errors import RegistryError
from subsonictree.node import MediaNode


class NodeRegistry:
    """In-memory store of the static nodes and their ordered child edges.

    The registry is filled once by the tree builder and only read afterwards,
    so lookups need no synchronization.
    """

    def __init__(self):
        self._nodes: Dict[str, MediaNode] = {}
        self._children: Dict[str, List[MediaNode]] = {}

    def put(self, node_id: str, node: MediaNode) -> None:
        """Register a node under its id.

        Raises:
            RegistryError: If the id is already registered or does not match the node.
        """
        if node_id in self._nodes:
            raise RegistryError(f"Node {node_id} is already registered")
        if node.node_id != node_id:
            raise RegistryError(
                f"Cannot register node {node.node_id} under mismatched id {node_id}"
            )
        self._nodes[node_id] = node
        self._children[node_id] = []

    def get(self, node_id: str) -> Optional[MediaNode]:
        return self._nodes.get(node_id)

    def add_child(self, parent_id: str, child_id: str) -> None:
        """Append an already registered node to a parent's children.

        Raises:
            RegistryError: If either node is missing.
        """
        if parent_id not in self._nodes:
            raise RegistryError(f"Parent node {parent_id} is not registered")
        if child_id not in self._nodes:
            raise RegistryError(f"Child node {child_id} is not registered")
        self._children[parent_id].append(self._nodes[child_id])

    def children(self, node_id: str) -> List[MediaNode]:
        """Return a copy of a node's children in insertion order."""
        return list(self._children.get(node_id, ()))

    def has_children(self, node_id: str) -> bool:
        return bool(self._children.get(node_id))

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)
