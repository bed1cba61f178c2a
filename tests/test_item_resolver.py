#!/usr/bin/env python3

import unittest
from unittest.mock import Mock

from subsonictree.errors import BadValueError, DataSourceError
from subsonictree.item_resolver import ItemResolver
from subsonictree.node import MediaNode
from subsonictree.registry import NodeRegistry


class TestItemResolver(unittest.TestCase):
    """Test case for ItemResolver class."""

    def setUp(self):
        self.registry = NodeRegistry()
        self.home = MediaNode.container("[homeID]", "Home")
        self.registry.put(self.home.node_id, self.home)
        self.source = Mock()
        self.resolver = ItemResolver(self.registry, lambda: self.source)

    def test_static_node_resolves_immediately(self):
        future = self.resolver.get_item("[homeID]")

        self.assertTrue(future.done())
        self.assertIs(future.result(), self.home)
        self.source.resolve_item.assert_not_called()

    def test_dynamic_item_uses_data_source(self):
        future = self.resolver.get_item("tr-1")

        self.source.resolve_item.assert_called_once_with("tr-1")
        self.assertIs(future, self.source.resolve_item.return_value)

    def test_item_lookup_is_keyed_by_id(self):
        """Different ids produce different lookups, never placeholder metadata."""
        self.resolver.get_item("tr-1")
        self.resolver.get_item("tr-2")

        self.assertEqual(
            [c.args for c in self.source.resolve_item.call_args_list], [("tr-1",), ("tr-2",)]
        )

    def test_empty_id(self):
        self.assertIsInstance(self.resolver.get_item("").exception(), BadValueError)

    def test_missing_data_source(self):
        resolver = ItemResolver(self.registry, lambda: None)

        future = resolver.get_item("tr-1")

        self.assertIsInstance(future.exception(), DataSourceError)


if __name__ == "__main__":
    unittest.main()
