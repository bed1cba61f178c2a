#!/usr/bin/env python3

from pathlib import Path
from typing import Iterable, List, Optional
from subsonictree import __version__
from subsonictree.client import SubsonicClient
from subsonictree.config import ConfigManager
from subsonictree.errors import BrowseError
from subsonictree.node import MediaNode
from subsonictree.processor import NodeProcessor
from subsonictree.repository import SubsonicRepository
from subsonictree.thread_manager import ThreadManager
from subsonictree.tree import MediaBrowserTree
import argparse
import logging
import sys


def setup_logging(args: argparse.Namespace) -> logging.Logger:
    """Configure logging based on command-line arguments.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Configured logger instance.
    """
    debug = getattr(args, "debug", False)
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    console = logging.StreamHandler(sys.stderr)
    handlers: List[logging.Handler] = [console]
    if not debug:
        console.setLevel(logging.WARNING)
        log_path = Path.home() / ".local" / "share" / "subsonictree" / "logs"
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_path / "subsonictree.log"))
        file_handler.setLevel(logging.INFO)
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, format=log_format, handlers=handlers)

    return logging.getLogger("SubsonicTree")


def format_node(node: MediaNode) -> str:
    kind = "play" if node.playable else "dir"
    line = f"{node.node_id}\t[{kind}]\t{node.title}\t{node.content_type.value}"
    if node.artist:
        line += f"\t{node.artist}"
    if node.album:
        line += f"\t{node.album}"
    return line


def parse_links(values: Optional[Iterable[str]]) -> dict:
    """Turn ``name`` / ``name=false`` arguments into link overrides."""
    links = {}
    for value in values or ():
        name, sep, flag = value.partition("=")
        links[name] = not sep or flag.lower() not in ("0", "false", "no", "off")
    return links


class BrowseCommandHandler:
    """Handles the browsing commands against a configured server."""

    def __init__(self, args: argparse.Namespace, logger: logging.Logger):
        """Initialize the browse command handler.

        Args:
            args: Parsed command-line arguments.
            logger: Logger instance.
        """
        self.args = args
        self.logger = logger
        self.config: Optional[ConfigManager] = None
        self.thread_manager: Optional[ThreadManager] = None

    def load_config(self) -> ConfigManager:
        return ConfigManager(
            config_file=self.args.config,
            server_url=self.args.server,
            username=self.args.username,
            password=self.args.password,
            linked_categories=parse_links(getattr(self.args, "link", None)),
            logger=self.logger,
        )

    def build_tree(self, connect: bool = True) -> MediaBrowserTree:
        """Create the tree, wired to a Subsonic repository when ``connect`` is set."""
        tree = MediaBrowserTree(
            link_overrides=self.config.linked_categories, logger=self.logger
        )
        repository = None
        if connect:
            self.config.validate()
            self.thread_manager = ThreadManager(logger=self.logger)
            client = SubsonicClient(self.config, logger=self.logger)
            processor = NodeProcessor(client, codec=tree.codec, logger=self.logger)
            repository = SubsonicRepository(
                client, processor, self.thread_manager, logger=self.logger
            )
        tree.initialize(repository)
        return tree

    def print_nodes(self, nodes: Iterable[MediaNode]) -> None:
        for node in nodes:
            print(format_node(node))

    def print_tree(self, tree: MediaBrowserTree) -> None:
        root = tree.get_root_item()
        print(format_node(root))
        for child in tree.registry.children(root.node_id):
            print("  " + format_node(child))
            for grandchild in tree.registry.children(child.node_id):
                print("    " + format_node(grandchild))

    def execute(self) -> int:
        """Execute the selected command.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        command = self.args.command
        self.logger.info(f"SubsonicTree version {__version__}, command {command}")
        try:
            self.config = self.load_config()
            tree = self.build_tree(connect=command != "tree")
            if command == "tree":
                self.print_tree(tree)
            elif command == "root":
                self.print_nodes([tree.get_root_item()])
            elif command == "children":
                self.print_nodes(tree.get_children(self.args.id).result())
            elif command == "item":
                self.print_nodes([tree.get_item(self.args.id).result()])
            return 0
        except BrowseError as e:
            self.logger.error(f"{command} failed (code {e.code}): {e}")
            return 1
        except Exception as e:
            self.logger.error(f"{command} failed: {e}")
            return 1
        finally:
            if self.thread_manager:
                self.thread_manager.shutdown(wait=False)


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point for SubsonicTree."""
    parser = argparse.ArgumentParser(
        description="SubsonicTree - Browse a Subsonic library as a media tree"
    )
    parser.add_argument(
        "--version", "-v", action="version", version=f"SubsonicTree {__version__}"
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", "-c", help="Config file path")
    common.add_argument("--server", "-s", help="Subsonic server url")
    common.add_argument("--username", "-u", help="Subsonic username")
    common.add_argument("--password", "-p", help="Subsonic password")
    common.add_argument(
        "--link",
        "-l",
        action="append",
        metavar="CATEGORY[=BOOL]",
        help="Attach (or detach) a category, e.g. 'starred_tracks' or 'downloads=false'",
    )
    common.add_argument(
        "--debug", "-d", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("tree", parents=[common], help="Print the static category tree")
    subparsers.add_parser("root", parents=[common], help="Print the root node")
    children_parser = subparsers.add_parser(
        "children", parents=[common], help="List the children of a node"
    )
    children_parser.add_argument("id", help="Node id, e.g. '[mostPlayedID]'")
    item_parser = subparsers.add_parser(
        "item", parents=[common], help="Resolve a single item"
    )
    item_parser.add_argument("id", help="Item id")

    args = parser.parse_args(argv)
    return BrowseCommandHandler(args, setup_logging(args)).execute()


if __name__ == "__main__":
    sys.exit(main())
