"""
Data models for Firefox bookmark backups.

A parsed backup is a tree of immutable Bookmark nodes. Containers (folders)
carry a tuple of children; leaves (actual bookmarks) carry ``children=None``
and a URI.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional, Tuple


# Values of the "type" field in a Firefox bookmarks backup
TYPE_CONTAINER = "text/x-moz-place-container"
TYPE_PLACE = "text/x-moz-place"
TYPE_SEPARATOR = "text/x-moz-place-separator"


@dataclass(frozen=True)
class Annotation:
    """
    Metadata record attached to a bookmark by the browser.

    Attributes:
        name: Annotation name (e.g. "bookmarkProperties/description")
        flags: Annotation flags
        expires: Expiration policy code
        value: Annotation value
    """
    name: str
    flags: int
    expires: int
    value: str


@dataclass(frozen=True)
class Bookmark:
    """
    One node of a bookmark tree, either a folder or a leaf item.

    Attributes:
        id: Identifier, unique within one export
        guid: Globally unique identifier
        title: Title (may be empty)
        index: Position among siblings
        date_added: When the node was created (UTC)
        last_modified: When the node was last changed (UTC)
        kind: Source "type" field, e.g. TYPE_CONTAINER or TYPE_PLACE
        root: Root discriminator such as "placesRoot", empty if absent
        annotation: First entry of the source "annos" array, or None
        children: Child nodes in source order; None for leaves
        uri: Bookmark URI, empty for folders
        charset: Page charset, empty if absent
        icon_uri: Favicon URI, empty if absent
    """
    id: int
    guid: str
    title: str
    index: int
    date_added: datetime
    last_modified: datetime
    kind: str
    root: str = ""
    annotation: Optional[Annotation] = None
    children: Optional[Tuple["Bookmark", ...]] = None
    uri: str = ""
    charset: str = ""
    icon_uri: str = ""

    @property
    def is_container(self) -> bool:
        """True when this node can hold children."""
        return self.children is not None

    def walk(self) -> Iterator["Bookmark"]:
        """Yield this node and every descendant, depth-first in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(reversed(node.children))

    def leaves(self) -> Iterator["Bookmark"]:
        """Yield every descendant leaf in document order."""
        for node in self.walk():
            if not node.is_container and node is not self:
                yield node

    def find_folder(self, title: str) -> Optional["Bookmark"]:
        """Return the first descendant container titled ``title``, if any."""
        for node in self.walk():
            if node is not self and node.is_container and node.title == title:
                return node
        return None

    def __str__(self) -> str:
        if self.is_container:
            return f"[{self.id}] {self.title}/ ({len(self.children)} items)"
        return f"[{self.id}] {self.title}\n    {self.uri}"
