"""
Parser for Firefox bookmark backups (bookmarks-YYYY-MM-DD.json).

Turns the JSON document into a tree of immutable Bookmark nodes. Every node
is read the same way regardless of depth: a node with a "children" array is
a container, anything else is a leaf that must carry a "uri".
"""
import json
import logging
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ffbookmarks.errors import MalformedInputError, ParseError
from ffbookmarks.models import Annotation, Bookmark

logger = logging.getLogger(__name__)


def parse_bookmarks(text: str) -> Bookmark:
    """
    Parse a bookmarks backup from a JSON string.

    Args:
        text: Contents of a Firefox bookmarks backup

    Returns:
        The root node of the bookmark tree

    Raises:
        ParseError: If the text is not valid JSON (NaN and Infinity literals
            included) or is nested deeper than the json module can decode
        MalformedInputError: If a required field is missing or has the wrong type
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(e.msg, e.lineno, e.colno) from e
    except RecursionError as e:
        raise ParseError("document is nested too deeply") from e

    root = _build_tree(data)
    logger.debug(f"Parsed bookmark tree '{root.root}' with {sum(1 for _ in root.walk())} nodes")
    return root


def parse_bookmarks_from_file(path: Union[str, Path]) -> Bookmark:
    """
    Parse a bookmarks backup file.

    Raises:
        OSError: If the file cannot be read
        ParseError: If the file is not valid JSON
        MalformedInputError: If the document is not a bookmarks backup
    """
    path = Path(path)
    logger.debug(f"Reading bookmarks from {path}")
    return parse_bookmarks(path.read_text(encoding="utf-8"))


class _Frame:
    """A node whose children are still being built."""

    __slots__ = ("fields", "path", "pending", "built")

    def __init__(self, fields: Dict[str, Any], path: str, pending: Optional[List[Any]]):
        self.fields = fields
        self.path = path
        self.pending = pending
        self.built: List[Bookmark] = []

    def finish(self) -> Bookmark:
        children = tuple(self.built) if self.pending is not None else None
        return Bookmark(children=children, **self.fields)


def _build_tree(data: Any) -> Bookmark:
    # Explicit stack so that deeply nested folders cannot exhaust the recursion limit
    stack = [_open_node(data, "$", is_root=True)]
    while True:
        frame = stack[-1]
        if frame.pending is not None and len(frame.built) < len(frame.pending):
            position = len(frame.built)
            child_path = f"{frame.path}.children[{position}]"
            stack.append(_open_node(frame.pending[position], child_path, is_root=False))
            continue

        node = stack.pop().finish()
        if not stack:
            return node
        stack[-1].built.append(node)


def _open_node(raw: Any, path: str, is_root: bool) -> _Frame:
    """Read the scalar fields of one node and decide whether it is a container."""
    if not isinstance(raw, dict):
        raise MalformedInputError("", path, "expected object")

    fields = {
        "id": _require_int(raw, "id", path),
        "guid": _require_str(raw, "guid", path),
        "title": _require_str(raw, "title", path),
        "index": _require_int(raw, "index", path),
        "date_added": _require_timestamp(raw, "dateAdded", path),
        "last_modified": _require_timestamp(raw, "lastModified", path),
        "kind": _require_str(raw, "type", path),
        "root": _require_str(raw, "root", path) if is_root else _optional_str(raw, "root", path),
        "annotation": _read_annotation(raw, path),
    }

    if is_root or "children" in raw:
        children = raw.get("children", _MISSING)
        if not isinstance(children, list):
            raise MalformedInputError("children", path, _reason(children, "array"))
        return _Frame(fields, path, children)

    fields["uri"] = _require_str(raw, "uri", path)
    fields["charset"] = _optional_str(raw, "charset", path)
    fields["icon_uri"] = _optional_str(raw, "iconuri", path)
    return _Frame(fields, path, None)


def _read_annotation(raw: Dict[str, Any], path: str) -> Optional[Annotation]:
    """Read the first entry of "annos"; None when the array is absent or empty."""
    annos = raw.get("annos")
    if annos is None:
        return None
    if not isinstance(annos, list):
        raise MalformedInputError("annos", path, "expected array for")
    if not annos:
        return None

    first = annos[0]
    anno_path = f"{path}.annos[0]"
    if not isinstance(first, dict):
        raise MalformedInputError("", anno_path, "expected object")
    return Annotation(
        name=_require_str(first, "name", anno_path),
        flags=_require_int(first, "flags", anno_path),
        expires=_require_int(first, "expires", anno_path),
        value=_require_str(first, "value", anno_path),
    )


# Marks a key that is absent, as opposed to present with a JSON null
_MISSING = object()

# Firefox stores PRTime (microseconds); some tools write milliseconds
_TIMESTAMP_DIVISORS = (1, 1_000, 1_000_000)


def _reject_constant(name: str):
    raise ParseError(f"non-standard constant '{name}'")


def _reason(value: Any, expected: str) -> str:
    return "missing" if value is _MISSING else f"expected {expected} for"


def _require_int(raw: Dict[str, Any], key: str, path: str) -> int:
    value = raw.get(key, _MISSING)
    # bool is a subclass of int but never a valid number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedInputError(key, path, _reason(value, "number"))
    if not math.isfinite(value):
        raise MalformedInputError(key, path, "expected finite number for")
    return int(value)


def _require_str(raw: Dict[str, Any], key: str, path: str) -> str:
    value = raw.get(key, _MISSING)
    if not isinstance(value, str):
        raise MalformedInputError(key, path, _reason(value, "string"))
    return value


def _optional_str(raw: Dict[str, Any], key: str, path: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedInputError(key, path, "expected string for")
    return value


def _require_timestamp(raw: Dict[str, Any], key: str, path: str) -> datetime:
    """
    Read a timestamp as whole UTC seconds.

    Values that fit as seconds are taken as seconds. Larger ones are scaled
    down from milliseconds or microseconds, whichever first fits.
    """
    value = _require_int(raw, key, path)
    for divisor in _TIMESTAMP_DIVISORS:
        try:
            return datetime.fromtimestamp(value // divisor, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            continue
    raise MalformedInputError(key, path, "out-of-range timestamp in")
