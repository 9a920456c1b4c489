import copy
import os
import json

import pytest

from ffbookmarks import config as config_module


SAMPLE_EXPORT = {
    "id": 1,
    "guid": "root________",
    "title": "",
    "index": 0,
    "dateAdded": 1400000000,
    "lastModified": 1400000500,
    "type": "text/x-moz-place-container",
    "root": "placesRoot",
    "children": [
        {
            "id": 2,
            "guid": "menu________",
            "title": "Bookmarks Menu",
            "index": 0,
            "dateAdded": 1400000001,
            "lastModified": 1400000600,
            "type": "text/x-moz-place-container",
            "root": "bookmarksMenuFolder",
            "children": [
                {
                    "id": 10,
                    "guid": "aaaaaaaaaaaa",
                    "title": "Python",
                    "index": 0,
                    "dateAdded": 1400001000,
                    "lastModified": 1400001000,
                    "type": "text/x-moz-place",
                    "uri": "https://www.python.org/",
                    "charset": "UTF-8",
                    "iconuri": "https://www.python.org/favicon.ico",
                },
                {
                    "id": 11,
                    "guid": "bbbbbbbbbbbb",
                    "title": "Tools",
                    "index": 1,
                    "dateAdded": 1400001100,
                    "lastModified": 1400001200,
                    "type": "text/x-moz-place-container",
                    "children": [
                        {
                            "id": 12,
                            "guid": "cccccccccccc",
                            "title": "pytest",
                            "index": 0,
                            "dateAdded": 1400001300,
                            "lastModified": 1400001300,
                            "type": "text/x-moz-place",
                            "uri": "https://docs.pytest.org/",
                        },
                    ],
                },
            ],
        },
        {
            "id": 3,
            "guid": "toolbar_____",
            "title": "Bookmarks Toolbar",
            "index": 1,
            "dateAdded": 1400000002,
            "lastModified": 1400000700,
            "type": "text/x-moz-place-container",
            "root": "toolbarFolder",
            "annos": [
                {
                    "name": "bookmarkProperties/description",
                    "flags": 0,
                    "expires": 4,
                    "value": "Add bookmarks to this folder to see them displayed on the Bookmarks Toolbar",
                },
            ],
            "children": [],
        },
        {
            "id": 4,
            "guid": "unfiled_____",
            "title": "Unsorted Bookmarks",
            "index": 2,
            "dateAdded": 1400000003,
            "lastModified": 1400000800,
            "type": "text/x-moz-place-container",
            "root": "unfiledBookmarksFolder",
            "children": [
                {
                    "id": 20,
                    "guid": "dddddddddddd",
                    "title": "Example A",
                    "index": 0,
                    "dateAdded": 1400002000,
                    "lastModified": 1400002000,
                    "type": "text/x-moz-place",
                    "uri": "http://a.example/",
                    "annos": [],
                },
                {
                    "id": 21,
                    "guid": "eeeeeeeeeeee",
                    "title": "Example A again",
                    "index": 1,
                    "dateAdded": 1400002100,
                    "lastModified": 1400002100,
                    "type": "text/x-moz-place",
                    "uri": "http://a.example/",
                },
                {
                    "id": 22,
                    "guid": "ffffffffffff",
                    "title": "Example B",
                    "index": 2,
                    "dateAdded": 1400002200,
                    "lastModified": 1400002200,
                    "type": "text/x-moz-place",
                    "uri": "http://b.example/",
                    "annos": [
                        {
                            "name": "bookmarkProperties/description",
                            "flags": 0,
                            "expires": 4,
                            "value": "The B site",
                        },
                        {
                            "name": "ignored/second",
                            "flags": 1,
                            "expires": 1,
                            "value": "not read",
                        },
                    ],
                },
            ],
        },
    ],
}


@pytest.fixture
def sample_export():
    """A small Firefox bookmarks backup as a dict (safe to modify)."""
    return copy.deepcopy(SAMPLE_EXPORT)


@pytest.fixture
def sample_json(sample_export):
    """The sample backup serialized to JSON text."""
    return json.dumps(sample_export)


@pytest.fixture
def sample_file(tmp_path, sample_json):
    """The sample backup written to a temporary bookmarks.json."""
    path = tmp_path / "bookmarks.json"
    path.write_text(sample_json, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user and local config files and FFBOOKMARKS_* variables out of tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("FFBOOKMARKS_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(config_module, "_config", None)
    yield
