"""
SubsonicTree - media browser tree for Subsonic libraries

Expose a Subsonic music library to media browsing clients as a navigable
tree of categories, albums, playlists and tracks.
"""

__version__ = "0.1.0"

from subsonictree.errors import BadValueError, BrowseError, UnimplementedError
from subsonictree.node import ContentType, MediaNode
from subsonictree.tree import MediaBrowserTree
