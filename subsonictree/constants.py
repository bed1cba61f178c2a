"""Shared constants for the subsonictree package."""

from typing import NamedTuple, Optional, Tuple

from subsonictree.node import ContentType


# Root
ROOT_ID = "[rootID]"

# First level
HOME_ID = "[homeID]"
LIBRARY_ID = "[libraryID]"
OTHER_ID = "[otherID]"

# Second level under HOME_ID
MOST_PLAYED_ID = "[mostPlayedID]"
LAST_PLAYED_ID = "[lastPlayedID]"
RECENTLY_ADDED_ID = "[recentlyAddedID]"
BEST_OF_ID = "[bestOfID]"
MADE_FOR_YOU_ID = "[madeForYouID]"
STARRED_TRACKS_ID = "[starredTracksID]"
STARRED_ALBUMS_ID = "[starredAlbumsID]"
STARRED_ARTISTS_ID = "[starredArtistsID]"

# Second level under LIBRARY_ID
FOLDER_ID = "[folderID]"
PLAYLIST_ID = "[playlistID]"

# Second level under OTHER_ID
PODCAST_ID = "[podcastID]"
RADIO_ID = "[radioID]"
DOWNLOAD_ID = "[downloadID]"

# Page size used by every list category that asks the server for a window.
DEFAULT_PAGE_SIZE = 100

# Upper bound on the artists returned when only the "best of" subset is wanted.
BEST_OF_LIMIT = 10

# Album list modes understood by getAlbumList2.
MODE_FREQUENT = "frequent"
MODE_RECENT = "recent"
MODE_NEWEST = "newest"
ALBUM_LIST_MODES: Tuple[str, ...] = (MODE_FREQUENT, MODE_RECENT, MODE_NEWEST)


class CategoryDefinition(NamedTuple):
    """Declarative description of one static node."""

    key: str
    node_id: str
    title: str
    content_type: ContentType
    parent_id: Optional[str]
    linked: bool = True


# Every static node in build order. The order within a parent defines the
# presentation order of that parent's children. Entries with linked=False are
# registered but not attached to their parent unless explicitly requested.
CATEGORY_DEFINITIONS: Tuple[CategoryDefinition, ...] = (
    CategoryDefinition("root", ROOT_ID, "Root Folder", ContentType.MIXED_FOLDER, None),
    CategoryDefinition("home", HOME_ID, "Home", ContentType.MIXED_FOLDER, ROOT_ID),
    CategoryDefinition("library", LIBRARY_ID, "Library", ContentType.MIXED_FOLDER, ROOT_ID),
    CategoryDefinition("other", OTHER_ID, "Other", ContentType.MIXED_FOLDER, ROOT_ID),
    CategoryDefinition(
        "most_played", MOST_PLAYED_ID, "Most played", ContentType.ALBUM_FOLDER, HOME_ID
    ),
    CategoryDefinition(
        "last_played", LAST_PLAYED_ID, "Last played", ContentType.ALBUM_FOLDER, HOME_ID
    ),
    CategoryDefinition(
        "recently_added",
        RECENTLY_ADDED_ID,
        "Recently added",
        ContentType.ALBUM_FOLDER,
        HOME_ID,
    ),
    CategoryDefinition(
        "best_of", BEST_OF_ID, "Best of", ContentType.PLAYLIST_FOLDER, HOME_ID
    ),
    CategoryDefinition(
        "made_for_you",
        MADE_FOR_YOU_ID,
        "Made for you",
        ContentType.PLAYLIST_FOLDER,
        HOME_ID,
    ),
    CategoryDefinition(
        "starred_tracks",
        STARRED_TRACKS_ID,
        "Starred tracks",
        ContentType.MIXED_FOLDER,
        HOME_ID,
        linked=False,
    ),
    CategoryDefinition(
        "starred_albums",
        STARRED_ALBUMS_ID,
        "Starred albums",
        ContentType.ALBUM_FOLDER,
        HOME_ID,
        linked=False,
    ),
    CategoryDefinition(
        "starred_artists",
        STARRED_ARTISTS_ID,
        "Starred artists",
        ContentType.ARTIST_FOLDER,
        HOME_ID,
        linked=False,
    ),
    CategoryDefinition("folders", FOLDER_ID, "Folders", ContentType.MIXED_FOLDER, LIBRARY_ID),
    CategoryDefinition(
        "playlists", PLAYLIST_ID, "Playlists", ContentType.PLAYLIST_FOLDER, LIBRARY_ID
    ),
    CategoryDefinition(
        "podcasts", PODCAST_ID, "Podcasts", ContentType.PODCAST_FOLDER, OTHER_ID
    ),
    CategoryDefinition(
        "radio", RADIO_ID, "Radio stations", ContentType.RADIO_FOLDER, OTHER_ID
    ),
    CategoryDefinition(
        "downloads",
        DOWNLOAD_ID,
        "Downloads",
        ContentType.RADIO_FOLDER,
        OTHER_ID,
        linked=False,
    ),
)

# Second level categories, i.e. everything a data source may be asked about.
CATEGORY_IDS: Tuple[str, ...] = tuple(
    d.node_id
    for d in CATEGORY_DEFINITIONS
    if d.parent_id is not None and d.parent_id != ROOT_ID
)

# Categories whose ids may prefix an entity key, in match priority order.
COMPOUND_PREFIXES: Tuple[str, ...] = (
    MOST_PLAYED_ID,
    LAST_PLAYED_ID,
    RECENTLY_ADDED_ID,
    BEST_OF_ID,
    MADE_FOR_YOU_ID,
    FOLDER_ID,
    PLAYLIST_ID,
    PODCAST_ID,
    RADIO_ID,
)

# Compound prefixes whose entity key is an album whose tracks can be listed.
ALBUM_DRILL_DOWN_PREFIXES = frozenset({MOST_PLAYED_ID, LAST_PLAYED_ID, RECENTLY_ADDED_ID})
