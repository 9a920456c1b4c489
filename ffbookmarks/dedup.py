"""
Duplicate detection for flat lists of bookmark items.

Two bookmarks are duplicates when their URIs are exactly equal. URIs are
compared as opaque strings: no case folding, no trailing-slash stripping.

Callers are expected to pass leaf items only. Folders all have an empty URI,
so a list mixing several folders would collapse them into one entry.
"""
from collections import defaultdict
from typing import Dict, Iterable, List

from ffbookmarks.models import Bookmark


def remove_duplicates(bookmarks: Iterable[Bookmark]) -> List[Bookmark]:
    """
    Remove bookmarks whose URI was already seen.

    Args:
        bookmarks: Bookmark items, usually the children of one folder

    Returns:
        New list with the first occurrence of each URI, in original order

    Example:
        >>> unique = remove_duplicates(root.children[2].children)
        >>> len(unique) <= len(root.children[2].children)  # True
    """
    seen = set()
    unique = []
    for bookmark in bookmarks:
        if bookmark.uri in seen:
            continue
        seen.add(bookmark.uri)
        unique.append(bookmark)
    return unique


def find_duplicates(bookmarks: Iterable[Bookmark]) -> Dict[str, List[Bookmark]]:
    """
    Group bookmarks sharing a URI.

    Returns:
        Mapping of URI to every bookmark with that URI, for URIs occurring
        more than once. Keys and groups follow first-seen order.
    """
    groups = defaultdict(list)
    for bookmark in bookmarks:
        groups[bookmark.uri].append(bookmark)

    return {uri: group for uri, group in groups.items() if len(group) > 1}


def get_duplicate_stats(bookmarks: Iterable[Bookmark]) -> Dict[str, int]:
    """
    Summarise duplicates in a list of bookmarks.

    Returns:
        Dictionary with total, unique, duplicate_groups and duplicates
        (the number of items remove_duplicates would drop)
    """
    bookmarks = list(bookmarks)
    duplicates = find_duplicates(bookmarks)
    unique = len(remove_duplicates(bookmarks))

    return {
        "total": len(bookmarks),
        "unique": unique,
        "duplicate_groups": len(duplicates),
        "duplicates": len(bookmarks) - unique,
    }
