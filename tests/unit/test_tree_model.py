"""
Tests for TreeModel: lazy expansion, caching side effects and the
directory table rows.
"""

from fsindex_core.domain.enums import FOLDER_LABEL, ROOT_LABEL
from fsindex_core.domain.models import FileRecord
from fsindex_core.services.cache import CacheEngine
from fsindex_core.services.search import SearchService
from fsindex_core.services.tree import TreeModel


def _tree(fs):
    cache = CacheEngine(fs)
    return TreeModel(fs, cache), cache


class TestTreeConstruction:
    """The synthetic root holds one unexpanded node per drive."""

    def test_root_children_are_drives(self, project_fs):
        tree, _ = _tree(project_fs)

        assert tree.root.label == ROOT_LABEL
        assert tree.root.expanded
        assert [d.path for d in tree.drives] == ["/data", "/other"]
        for drive in tree.drives:
            assert not drive.expanded
            assert drive.has_placeholder
            assert drive.label == drive.path

    def test_construction_touches_no_directories(self, project_fs):
        _tree(project_fs)
        assert project_fs.calls == []


class TestExpand:
    """expand() materializes directory children and caches subtrees."""

    def test_expand_attaches_directories_only(self, project_fs):
        tree, _ = _tree(project_fs)
        data = tree.drives[0]

        children = tree.expand(data)

        assert data.expanded
        assert not data.has_placeholder
        assert [c.label for c in children] == ["docs"]
        assert [c.path for c in data.children] == ["/data/docs"]

    def test_new_children_are_unexpanded_with_placeholder(self, project_fs):
        tree, _ = _tree(project_fs)
        docs = tree.expand(tree.drives[0])[0]

        assert not docs.expanded
        assert docs.has_placeholder
        assert docs.parent is tree.drives[0]

    def test_expand_caches_whole_child_subtrees(self, project_fs):
        tree, cache = _tree(project_fs)

        tree.expand(tree.drives[0])

        for path in [
            "/data/docs", "/data/archive.tar.gz", "/data/README",
            "/data/docs/report.txt", "/data/docs/drafts",
            "/data/docs/drafts/Draft.DOCX",
        ]:
            assert path in cache, path

    def test_expand_is_idempotent(self, project_fs):
        tree, cache = _tree(project_fs)
        data = tree.drives[0]

        first = [c.path for c in tree.expand(data)]
        calls = list(project_fs.calls)
        size = len(cache)
        second = [c.path for c in tree.expand(data)]

        assert first == second
        assert project_fs.calls == calls
        assert len(cache) == size
        assert len(data.children) == 1

    def test_expanding_cached_child_reuses_listing(self, project_fs):
        tree, _ = _tree(project_fs)
        docs = tree.expand(tree.drives[0])[0]
        calls_before = list(project_fs.calls)

        children = tree.expand(docs)

        assert [c.label for c in children] == ["drafts"]
        # One listing for the node itself, none for the already cached subtree
        assert project_fs.calls == calls_before + ["/data/docs"]

    def test_failed_listing_leaves_node_expanded_and_empty(self, fake_fs_class):
        fs = fake_fs_class({}, roots=["/locked"], denied=["/locked"])
        tree, _ = _tree(fs)
        node = tree.drives[0]

        assert tree.expand(node) == []
        assert node.expanded
        assert node.children == []

        tree.expand(node)
        assert fs.calls == ["/locked"]

    def test_vanished_directory_expands_empty(self, fake_fs_class):
        fs = fake_fs_class({}, roots=["/gone"])
        tree, _ = _tree(fs)

        assert tree.expand(tree.drives[0]) == []
        assert tree.drives[0].expanded

    def test_expanding_root_or_placeholder_is_noop(self, project_fs):
        tree, _ = _tree(project_fs)
        placeholder = tree.drives[0].children[0]

        assert tree.expand(tree.root) == tree.drives
        assert tree.expand(placeholder) == []
        assert project_fs.calls == []


class TestListDirectory:
    """Rows for the table: folders first, then cached files."""

    def test_rows(self, project_fs):
        tree, _ = _tree(project_fs)

        rows = tree.list_directory(tree.drives[0])

        assert [(r.name, r.kind_label) for r in rows] == [
            ("docs", FOLDER_LABEL),
            ("archive.tar.gz", "gz"),
            ("README", ""),
        ]
        assert tree.drives[0].expanded

    def test_rows_keep_files_cached_in_earlier_sessions(self, project_fs):
        """File rows come from the index, so a file gone from disk still shows."""
        tree, cache = _tree(project_fs)
        cache.load([FileRecord.from_path("/data/old.log", is_dir=False)])

        rows = tree.list_directory(tree.drives[0])

        assert [r.name for r in rows] == ["docs", "old.log", "archive.tar.gz", "README"]

    def test_rows_of_synthetic_root(self, project_fs):
        tree, _ = _tree(project_fs)
        rows = tree.list_directory(tree.root)
        assert [r.path for r in rows] == ["/data", "/other"]
        assert all(r.kind_label == FOLDER_LABEL for r in rows)


class TestReachability:
    """Only reached directories are searchable."""

    def test_unexpanded_drive_is_not_searchable(self, project_fs):
        tree, cache = _tree(project_fs)
        search = SearchService(cache)

        tree.expand(tree.drives[0])

        assert search.query("hidden", True, True) == []
        assert [r.name for r in search.query("draft", True, False)] == ["Draft.DOCX"]

    def test_cache_roots_makes_everything_searchable(self, project_fs):
        tree, cache = _tree(project_fs)
        search = SearchService(cache)

        results = tree.cache_roots()

        assert len(results) == 2
        assert [r.name for r in search.query("hidden", True, True)] == ["hidden.txt"]

    def test_find(self, project_fs):
        tree, _ = _tree(project_fs)
        tree.expand(tree.drives[0])

        assert tree.find("/data/docs").label == "docs"
        assert tree.find("/data/docs/drafts") is None
