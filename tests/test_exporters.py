"""
Comprehensive tests for ffbookmarks/exporters.py

Tests all export functions including:
- format_csv / write_csv
- format_html / write_html (raw and escaped cells)
- export_file (with format selection)
"""
import csv as csv_module
import io
from datetime import datetime, timezone

import pytest
from bs4 import BeautifulSoup

from ffbookmarks.exporters import (
    HTML_COLUMNS,
    export_file,
    format_csv,
    format_html,
    write_csv,
    write_html,
)
from ffbookmarks.models import Bookmark, TYPE_PLACE
from ffbookmarks.parser import parse_bookmarks


WHEN = datetime(2020, 1, 1, tzinfo=timezone.utc)


def item(id, uri, title="", charset="", icon_uri=""):
    return Bookmark(id=id, guid=f"guid{id}", title=title, index=id - 1, date_added=WHEN,
                    last_modified=WHEN, kind=TYPE_PLACE, uri=uri, charset=charset,
                    icon_uri=icon_uri)


@pytest.fixture
def bookmarks(sample_json):
    """The "Unsorted Bookmarks" items of the sample backup."""
    return list(parse_bookmarks(sample_json).children[2].children)


class TestFormatCsv:
    """Test CSV formatting."""

    def test_row_per_bookmark_with_ten_fields(self, bookmarks):
        text = format_csv(bookmarks)

        rows = list(csv_module.reader(io.StringIO(text)))
        assert len(rows) == len(bookmarks)
        assert all(len(row) == 10 for row in rows)
        assert text.count("\n") == len(bookmarks)
        assert text.endswith("\n")

    def test_field_order(self):
        b = item(7, "http://x.example/", title="X", charset="UTF-8", icon_uri="http://x.example/i.ico")

        row = next(csv_module.reader(io.StringIO(format_csv([b]))))

        assert row == [
            "7", "guid7", "X", "6",
            "2020-01-01 00:00:00+00:00", "2020-01-01 00:00:00+00:00",
            "UTF-8", TYPE_PLACE, "http://x.example/", "http://x.example/i.ico",
        ]

    def test_no_header(self, bookmarks):
        first = format_csv(bookmarks).splitlines()[0]
        assert first.startswith("20,")

    def test_special_characters_are_quoted(self):
        b = item(1, "http://x.example/?a=1,2", title='Say "hi",\nthen leave')

        text = format_csv([b])
        row = next(csv_module.reader(io.StringIO(text)))

        assert len(row) == 10
        assert row[2] == 'Say "hi",\nthen leave'
        assert row[8] == "http://x.example/?a=1,2"
        assert '"Say ""hi"",' in text

    def test_empty_list(self):
        assert format_csv([]) == ""

    def test_preserves_input_order(self):
        text = format_csv([item(3, "c"), item(1, "a"), item(2, "b")])
        assert [line.split(",")[0] for line in text.splitlines()] == ["3", "1", "2"]


class TestFormatHtml:
    """Test HTML table formatting."""

    def test_document_structure(self, bookmarks):
        text = format_html(bookmarks)

        assert text.startswith("<!DOCTYPE html>")
        soup = BeautifulSoup(text, "html.parser")
        assert soup.title.string == "ffbookmarks"
        assert len(soup.find_all("table")) == 1
        assert len(soup.table.find_all("tr")) == len(bookmarks) + 1

    def test_header_row(self, bookmarks):
        soup = BeautifulSoup(format_html(bookmarks), "html.parser")
        headers = [th.get_text() for th in soup.table.find("tr").find_all("th")]
        assert headers == HTML_COLUMNS == [
            "ID", "GUID", "Title", "Index", "Date Added", "Last Modified",
            "Charset", "Type", "URI", "Icon URI",
        ]

    def test_cells_follow_column_order(self):
        b = item(7, "http://x.example/", title="X", charset="UTF-8")

        soup = BeautifulSoup(format_html([b]), "html.parser")
        cells = [td.get_text() for td in soup.table.find_all("tr")[1].find_all("td")]

        assert cells == [
            "7", "guid7", "X", "6",
            "2020-01-01 00:00:00+00:00", "2020-01-01 00:00:00+00:00",
            "UTF-8", TYPE_PLACE, "http://x.example/", "",
        ]

    def test_empty_list_has_header_only(self):
        soup = BeautifulSoup(format_html([]), "html.parser")
        assert len(soup.table.find_all("tr")) == 1

    def test_values_are_raw_by_default(self):
        b = item(1, "http://x.example/?a=1&b=2", title="<b>bold</b>")
        text = format_html([b])

        assert "<td><b>bold</b></td>" in text
        assert "<td>http://x.example/?a=1&b=2</td>" in text

    def test_escape_option(self):
        b = item(1, "http://x.example/?a=1&b=2", title="<b>bold</b>")
        text = format_html([b], escape=True)

        assert "<td>&lt;b&gt;bold&lt;/b&gt;</td>" in text
        assert "<td>http://x.example/?a=1&amp;b=2</td>" in text
        soup = BeautifulSoup(text, "html.parser")
        assert soup.table.find_all("tr")[1].find_all("td")[2].get_text() == "<b>bold</b>"

    def test_custom_title(self):
        soup = BeautifulSoup(format_html([], title="My <Export>"), "html.parser")
        assert soup.title.string == "My <Export>"


class TestWriters:
    """Test file output."""

    def test_write_csv(self, tmp_path, bookmarks):
        path = tmp_path / "bookmarks.csv"
        write_csv(bookmarks, path)

        assert path.read_bytes().decode("utf-8") == format_csv(bookmarks)

    def test_write_html(self, tmp_path, bookmarks):
        path = tmp_path / "bookmarks.html"
        write_html(bookmarks, str(path))

        assert path.read_text(encoding="utf-8") == format_html(bookmarks)

    def test_write_truncates_existing_file(self, tmp_path):
        path = tmp_path / "out.csv"
        path.write_text("old content that is longer than the new one\n" * 10)

        write_csv([item(1, "u")], path)

        assert path.read_text().count("\n") == 1

    def test_write_to_missing_directory_fails(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            write_csv([], tmp_path / "nope" / "out.csv")


class TestExportFile:
    """Test the export_file function with format selection."""

    def test_export_csv(self, tmp_path, bookmarks):
        path = tmp_path / "out.csv"
        export_file(bookmarks, path, format="csv")
        assert path.read_text(encoding="utf-8") == format_csv(bookmarks)

    def test_export_html_with_options(self, tmp_path):
        path = tmp_path / "out.html"
        export_file([item(1, "u", title="<i>")], path, format="html", escape=True, title="T")

        content = path.read_text(encoding="utf-8")
        assert "<title>T</title>" in content
        assert "&lt;i&gt;" in content

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "a" / "b" / "out.html"
        export_file([], path, format="html")
        assert path.exists()

    def test_unknown_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown format"):
            export_file([], tmp_path / "out.json", format="json")
