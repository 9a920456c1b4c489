"""
ffbookmarks - Firefox bookmark backup toolkit

Reads Firefox bookmarks backups (the JSON files under a profile's
bookmarkbackups/ directory), exports folders as CSV or HTML tables and
removes duplicate bookmarks.

Example Usage:
    >>> from ffbookmarks import parse_bookmarks_from_file, remove_duplicates, format_csv, write_html
    >>> root = parse_bookmarks_from_file("bookmarks.json")
    >>> bookmarks = root.children[2].children  # "Unsorted Bookmarks" by default
    >>> print(format_csv(bookmarks[:10]))
    >>> write_html(remove_duplicates(bookmarks), "bookmarks.html")
"""

__version__ = "0.2.0"

# Models
from ffbookmarks.models import (
    Annotation,
    Bookmark,
    TYPE_CONTAINER,
    TYPE_PLACE,
    TYPE_SEPARATOR,
)

# Errors
from ffbookmarks.errors import FFBookmarksError, MalformedInputError, ParseError

# Parsing
from ffbookmarks.parser import parse_bookmarks, parse_bookmarks_from_file

# Deduplication
from ffbookmarks.dedup import find_duplicates, get_duplicate_stats, remove_duplicates

# Export
from ffbookmarks.exporters import (
    export_file,
    format_csv,
    format_html,
    write_csv,
    write_html,
)

# Configuration
from ffbookmarks.config import FFBookmarksConfig, get_config, init_config

__all__ = [
    # Models
    "Annotation",
    "Bookmark",
    "TYPE_CONTAINER",
    "TYPE_PLACE",
    "TYPE_SEPARATOR",
    # Errors
    "FFBookmarksError",
    "MalformedInputError",
    "ParseError",
    # Parsing
    "parse_bookmarks",
    "parse_bookmarks_from_file",
    # Deduplication
    "remove_duplicates",
    "find_duplicates",
    "get_duplicate_stats",
    # Export
    "format_csv",
    "format_html",
    "write_csv",
    "write_html",
    "export_file",
    # Config
    "FFBookmarksConfig",
    "get_config",
    "init_config",
]
