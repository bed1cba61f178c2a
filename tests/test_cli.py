#!/usr/bin/env python3

import argparse
import io
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from subsonictree import cli
from subsonictree.errors import BadValueError
from subsonictree.node import MediaNode
from subsonictree.thread_manager import completed_future, failed_future

CONNECTION = [
    "--config",
    "/nonexistent/subsonictree/config.json",
    "--server",
    "http://localhost:4533",
    "--username",
    "joe",
    "--password",
    "sesame",
]


class TestCli(unittest.TestCase):
    """Tests for the command-line interface."""

    def setUp(self):
        self.patcher_logging = patch.object(
            cli, "setup_logging", return_value=logging.getLogger("test")
        )
        self.patcher_logging.start()
        self.patcher_client = patch.object(cli, "SubsonicClient")
        self.patcher_client.start()
        self.patcher_repository = patch.object(cli, "SubsonicRepository")
        self.repository = self.patcher_repository.start().return_value

    def tearDown(self):
        patch.stopall()

    def run_cli(self, *argv):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            code = cli.main(list(argv))
        return code, stdout.getvalue()

    def test_tree_needs_no_server(self):
        code, output = self.run_cli("tree", "--config", "/nonexistent/config.json")

        self.assertEqual(code, 0)
        self.assertIn("[rootID]", output)
        self.assertIn("    [mostPlayedID]\t[dir]\tMost played", output)
        self.assertNotIn("[downloadID]", output)
        cli.SubsonicClient.assert_not_called()

    def test_tree_with_linked_category(self):
        code, output = self.run_cli(
            "tree", "--config", "/nonexistent/config.json", "--link", "downloads"
        )

        self.assertEqual(code, 0)
        self.assertIn("[downloadID]", output)

    def test_tree_with_unknown_category_fails(self):
        code, _ = self.run_cli("tree", "--config", "/nonexistent/config.json", "--link", "bogus")
        self.assertEqual(code, 1)

    def test_root(self):
        code, output = self.run_cli("root", *CONNECTION)

        self.assertEqual(code, 0)
        self.assertTrue(output.startswith("[rootID]\t[dir]\tRoot Folder"))

    def test_children(self):
        self.repository.albums_by_mode.return_value = completed_future(
            [MediaNode.container("[mostPlayedID]al-1", "Blue", artist="Joni")]
        )

        code, output = self.run_cli("children", "[mostPlayedID]", *CONNECTION)

        self.assertEqual(code, 0)
        self.repository.albums_by_mode.assert_called_once_with("[mostPlayedID]", "frequent", 100)
        self.assertIn("[mostPlayedID]al-1\t[dir]\tBlue\tmixed-folder\tJoni", output)

    def test_item_failure_exit_code(self):
        self.repository.resolve_item.return_value = failed_future(BadValueError("missing"))

        code, output = self.run_cli("item", "tr-404", *CONNECTION)

        self.assertEqual(code, 1)
        self.assertEqual(output, "")

    def test_missing_server_config(self):
        code, _ = self.run_cli("root", "--config", "/nonexistent/config.json")
        self.assertEqual(code, 1)

    def test_malformed_config_file_fails_cleanly(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            config_file = os.path.join(temp_dir, "config.json")
            with open(config_file, "w") as f:
                f.write("{not json")

            code, output = self.run_cli("tree", "--config", config_file, "--debug")

        self.assertEqual(code, 1)
        self.assertEqual(output, "")

    def test_parse_links(self):
        self.assertEqual(
            cli.parse_links(["downloads", "best_of=false", "starred_tracks=yes"]),
            {"downloads": True, "best_of": False, "starred_tracks": True},
        )
        self.assertEqual(cli.parse_links(None), {})


class TestSetupLogging(unittest.TestCase):
    """Tests for setup_logging."""

    @patch("subsonictree.cli.logging.basicConfig")
    def test_file_log_receives_info(self, mock_basic_config):
        with tempfile.TemporaryDirectory() as temp_dir:
            with patch("subsonictree.cli.Path.home", return_value=Path(temp_dir)):
                cli.setup_logging(argparse.Namespace(debug=False))

            kwargs = mock_basic_config.call_args.kwargs
            console, file_handler = kwargs["handlers"]
            file_handler.close()

        self.assertEqual(kwargs["level"], logging.INFO)
        self.assertEqual(console.level, logging.WARNING)
        self.assertEqual(file_handler.level, logging.INFO)

    @patch("subsonictree.cli.logging.basicConfig")
    def test_debug_logs_to_console_only(self, mock_basic_config):
        cli.setup_logging(argparse.Namespace(debug=True))

        kwargs = mock_basic_config.call_args.kwargs
        self.assertEqual(kwargs["level"], logging.DEBUG)
        self.assertEqual(len(kwargs["handlers"]), 1)
        self.assertEqual(kwargs["handlers"][0].level, logging.NOTSET)


if __name__ == "__main__":
    unittest.main()
