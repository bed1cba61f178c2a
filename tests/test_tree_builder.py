#!/usr/bin/env python3

import unittest

from subsonictree.constants import (
    BEST_OF_ID,
    DOWNLOAD_ID,
    FOLDER_ID,
    HOME_ID,
    LAST_PLAYED_ID,
    LIBRARY_ID,
    MADE_FOR_YOU_ID,
    MOST_PLAYED_ID,
    OTHER_ID,
    PLAYLIST_ID,
    PODCAST_ID,
    RADIO_ID,
    RECENTLY_ADDED_ID,
    ROOT_ID,
    STARRED_ALBUMS_ID,
    STARRED_ARTISTS_ID,
    STARRED_TRACKS_ID,
    CategoryDefinition,
)
from subsonictree.errors import RegistryError
from subsonictree.node import ContentType
from subsonictree.registry import NodeRegistry
from subsonictree.tree_builder import TreeBuilder


def child_ids(registry, node_id):
    return [node.node_id for node in registry.children(node_id)]


class TestTreeBuilder(unittest.TestCase):
    """Test case for TreeBuilder class."""

    def setUp(self):
        self.registry = NodeRegistry()

    def test_default_hierarchy(self):
        """Test the default three level hierarchy and its ordering."""
        root = TreeBuilder().build(self.registry)

        self.assertEqual(root.node_id, ROOT_ID)
        self.assertEqual(root.title, "Root Folder")
        self.assertEqual(child_ids(self.registry, ROOT_ID), [HOME_ID, LIBRARY_ID, OTHER_ID])
        self.assertEqual(
            child_ids(self.registry, HOME_ID),
            [MOST_PLAYED_ID, LAST_PLAYED_ID, RECENTLY_ADDED_ID, BEST_OF_ID, MADE_FOR_YOU_ID],
        )
        self.assertEqual(child_ids(self.registry, LIBRARY_ID), [FOLDER_ID, PLAYLIST_ID])
        self.assertEqual(child_ids(self.registry, OTHER_ID), [PODCAST_ID, RADIO_ID])

    def test_unlinked_categories_are_registered(self):
        """Defined but unlinked categories stay addressable by id."""
        TreeBuilder().build(self.registry)

        for node_id in (STARRED_TRACKS_ID, STARRED_ALBUMS_ID, STARRED_ARTISTS_ID, DOWNLOAD_ID):
            self.assertIn(node_id, self.registry)
        self.assertEqual(len(self.registry), 17)

    def test_leaf_categories_have_no_children(self):
        TreeBuilder().build(self.registry)

        for node_id in (MOST_PLAYED_ID, PLAYLIST_ID, RADIO_ID, DOWNLOAD_ID):
            self.assertEqual(self.registry.children(node_id), [])

    def test_all_static_nodes_are_containers(self):
        TreeBuilder().build(self.registry)

        for node_id in self.registry:
            node = self.registry.get(node_id)
            self.assertTrue(node.browsable)
            self.assertFalse(node.playable)
            self.assertIsNone(node.source_uri)

    def test_titles_and_content_types(self):
        TreeBuilder().build(self.registry)

        expected = {
            HOME_ID: ("Home", ContentType.MIXED_FOLDER),
            MOST_PLAYED_ID: ("Most played", ContentType.ALBUM_FOLDER),
            BEST_OF_ID: ("Best of", ContentType.PLAYLIST_FOLDER),
            STARRED_ARTISTS_ID: ("Starred artists", ContentType.ARTIST_FOLDER),
            PODCAST_ID: ("Podcasts", ContentType.PODCAST_FOLDER),
            RADIO_ID: ("Radio stations", ContentType.RADIO_FOLDER),
            DOWNLOAD_ID: ("Downloads", ContentType.RADIO_FOLDER),
        }
        for node_id, (title, content_type) in expected.items():
            node = self.registry.get(node_id)
            self.assertEqual(node.title, title)
            self.assertEqual(node.content_type, content_type)

    def test_link_overrides_attach_hidden_categories(self):
        builder = TreeBuilder(
            link_overrides={"starred_tracks": True, "downloads": True, "best_of": False}
        )
        builder.build(self.registry)

        self.assertEqual(
            child_ids(self.registry, HOME_ID),
            [MOST_PLAYED_ID, LAST_PLAYED_ID, RECENTLY_ADDED_ID, MADE_FOR_YOU_ID, STARRED_TRACKS_ID],
        )
        self.assertEqual(child_ids(self.registry, OTHER_ID), [PODCAST_ID, RADIO_ID, DOWNLOAD_ID])
        self.assertIn(BEST_OF_ID, self.registry)

    def test_unknown_override_is_rejected(self):
        with self.assertRaises(ValueError):
            TreeBuilder(link_overrides={"favourites": True})

    def test_top_level_override_is_rejected(self):
        """Root's children are fixed."""
        with self.assertRaises(ValueError):
            TreeBuilder(link_overrides={"library": False})

    def test_building_twice_into_one_registry_fails(self):
        TreeBuilder().build(self.registry)
        with self.assertRaises(RegistryError):
            TreeBuilder().build(self.registry)

    def test_child_before_parent_is_a_registry_error(self):
        definitions = (
            CategoryDefinition("root", ROOT_ID, "Root", ContentType.MIXED_FOLDER, None),
            CategoryDefinition("orphan", "[orphan]", "Orphan", ContentType.MIXED_FOLDER, "[nowhere]"),
        )
        with self.assertRaises(RegistryError):
            TreeBuilder(definitions=definitions).build(self.registry)

    def test_definitions_without_root(self):
        definitions = (
            CategoryDefinition("home", HOME_ID, "Home", ContentType.MIXED_FOLDER, ROOT_ID, linked=False),
        )
        with self.assertRaises(ValueError):
            TreeBuilder(definitions=definitions).build(self.registry)


if __name__ == "__main__":
    unittest.main()
