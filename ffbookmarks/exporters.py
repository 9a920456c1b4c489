"""
Tabular exporters for bookmark items.

format_csv and format_html are pure functions returning text; the write_*
helpers and export_file put that text on disk.
"""
import csv
import html
import io
import logging
from pathlib import Path
from typing import Iterable, List, Union

from ffbookmarks.models import Bookmark

logger = logging.getLogger(__name__)

DEFAULT_HTML_TITLE = "ffbookmarks"

HTML_COLUMNS = [
    "ID", "GUID", "Title", "Index", "Date Added", "Last Modified",
    "Charset", "Type", "URI", "Icon URI",
]


def bookmark_row(bookmark: Bookmark) -> List[str]:
    """Fields of one bookmark in export column order."""
    return [
        str(bookmark.id),
        bookmark.guid,
        bookmark.title,
        str(bookmark.index),
        str(bookmark.date_added),
        str(bookmark.last_modified),
        bookmark.charset,
        bookmark.kind,
        bookmark.uri,
        bookmark.icon_uri,
    ]


def format_csv(bookmarks: Iterable[Bookmark]) -> str:
    """
    Format bookmarks as CSV.

    One row per bookmark, no header. Fields are quoted only when they
    contain a comma, a quote or a line break.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for b in bookmarks:
        writer.writerow(bookmark_row(b))
    return buffer.getvalue()


def format_html(bookmarks: Iterable[Bookmark], escape: bool = False,
                title: str = DEFAULT_HTML_TITLE) -> str:
    """
    Format bookmarks as a standalone HTML document with a single table.

    Args:
        bookmarks: Bookmark items to list
        escape: HTML-escape cell values. Off by default, so a title
            containing markup is emitted verbatim and can break the table.
        title: Document title
    """
    cell = html.escape if escape else str

    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        f"<title>{html.escape(title)}</title>",
        "</head>",
        "<body>",
        "<table>",
        "<tr>" + "".join(f"<th>{name}</th>" for name in HTML_COLUMNS) + "</tr>",
    ]

    for b in bookmarks:
        lines.append("<tr>" + "".join(f"<td>{cell(value)}</td>" for value in bookmark_row(b)) + "</tr>")

    lines.extend(["</table>", "</body>", "</html>"])
    return "\n".join(lines) + "\n"


def write_csv(bookmarks: Iterable[Bookmark], path: Union[str, Path]) -> None:
    """Format bookmarks as CSV and write them to ``path``, replacing any existing file."""
    _write_text(Path(path), format_csv(bookmarks))


def write_html(bookmarks: Iterable[Bookmark], path: Union[str, Path], escape: bool = False,
               title: str = DEFAULT_HTML_TITLE) -> None:
    """Format bookmarks as HTML and write them to ``path``, replacing any existing file."""
    _write_text(Path(path), format_html(bookmarks, escape=escape, title=title))


def export_file(bookmarks: Iterable[Bookmark], path: Union[str, Path], format: str, **options) -> None:
    """
    Export bookmarks to a file.

    Args:
        bookmarks: Bookmark items to export
        path: Output file path
        format: Export format (csv, html)
        **options: Passed through to the writer (escape, title for html)
    """
    exporters = {
        "csv": write_csv,
        "html": write_html,
    }

    exporter = exporters.get(format)
    if not exporter:
        raise ValueError(f"Unknown format: {format}")

    # Ensure parent directory exists
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    exporter(bookmarks, path, **options)


def _write_text(path: Path, content: str) -> None:
    # newline="" keeps the "\n" row terminators as they are on every platform
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    logger.info(f"Wrote {path}")
