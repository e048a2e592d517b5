"""
Tests for SearchService: substring matching and kind filtering over a
fixed index. Search must never touch the filesystem.
"""

import pytest

from fsindex_core.domain.enums import FOLDER_LABEL
from fsindex_core.domain.models import FileRecord
from fsindex_core.services.cache import CacheEngine
from fsindex_core.services.search import SearchService


@pytest.fixture
def fs(fake_fs_class):
    return fake_fs_class({})


@pytest.fixture
def search(fs):
    """Index: /x/report.txt (file), /x/docs (dir), /x/readme (file)."""
    cache = CacheEngine(fs)
    cache.load([
        FileRecord.from_path("/x/report.txt", is_dir=False),
        FileRecord.from_path("/x/docs", is_dir=True),
        FileRecord.from_path("/x/readme", is_dir=False),
    ])
    return SearchService(cache)


def _pairs(rows):
    return {(r.name, r.kind_label) for r in rows}


class TestQuery:
    """query(text, include_files, include_dirs)."""

    def test_files_only(self, search):
        rows = search.query("re", include_files=True, include_dirs=False)
        assert _pairs(rows) == {("report.txt", "txt"), ("readme", "")}

    def test_dirs_only_no_match(self, search):
        assert search.query("re", include_files=False, include_dirs=True) == []

    def test_empty_text_matches_everything(self, search):
        rows = search.query("", True, True)
        assert _pairs(rows) == {
            ("report.txt", "txt"), ("docs", FOLDER_LABEL), ("readme", ""),
        }

    def test_both_flags_false(self, search):
        assert search.query("", False, False) == []
        assert search.query("re", False, False) == []

    def test_case_insensitive(self, search):
        assert _pairs(search.query("REPORT", True, False)) == {("report.txt", "txt")}
        assert _pairs(search.query("Docs", False, True)) == {("docs", FOLDER_LABEL)}

    def test_text_is_stripped(self, search):
        assert _pairs(search.query("  docs  ", True, True)) == {("docs", FOLDER_LABEL)}

    def test_rows_carry_paths(self, search):
        rows = search.query("docs", True, True)
        assert rows[0].path == "/x/docs"
        assert rows[0].is_dir

    def test_limit(self, search):
        assert len(search.query("", True, True, limit=2)) == 2

    def test_order_is_deterministic(self, search):
        first = [r.path for r in search.query("", True, True)]
        second = [r.path for r in search.query("", True, True)]
        assert first == second

    def test_no_filesystem_calls(self, search, fs):
        search.query("re", True, True)
        search.query("", True, True)
        assert fs.calls == []


class TestHelpers:
    """Extension lookup, record access and statistics."""

    def test_find_by_extension(self, search):
        rows = search.find_by_extension("TXT")
        assert [r.name for r in rows] == ["report.txt"]

    def test_get_file(self, search):
        assert search.get_file("/x/docs").is_dir
        assert search.get_file("/x/missing") is None

    def test_stats(self, search):
        assert search.get_stats() == {"file_count": 2, "dir_count": 1, "total": 3}
