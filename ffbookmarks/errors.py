"""
Exceptions raised while reading bookmark backups.

File access problems are not wrapped: they surface as the built-in OSError
family (FileNotFoundError, PermissionError, ...).
"""


class FFBookmarksError(Exception):
    """Base class for ffbookmarks errors."""
    pass


class ParseError(FFBookmarksError):
    """Input text is not valid JSON."""

    def __init__(self, message: str, lineno: int = 0, colno: int = 0):
        self.lineno = lineno
        self.colno = colno
        if lineno:
            super().__init__(f"Invalid JSON at line {lineno}, column {colno}: {message}")
        else:
            super().__init__(f"Invalid JSON: {message}")


class MalformedInputError(FFBookmarksError):
    """
    Valid JSON that does not look like a bookmarks backup.

    Attributes:
        field: Name of the offending field
        path: Position of the node in the tree, e.g. "$.children[2].children[0]"
        reason: What is wrong with the field ("missing", "expected int", ...)
    """

    def __init__(self, field: str, path: str, reason: str = "missing"):
        self.field = field
        self.path = path
        self.reason = reason
        if field:
            super().__init__(f"{path}: {reason} field '{field}'")
        else:
            super().__init__(f"{path}: {reason}")
