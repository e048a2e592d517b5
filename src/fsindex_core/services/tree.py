"""
Tree Model - lazy directory hierarchy for navigation.

Nodes start UNEXPANDED with a single placeholder child and are
materialized the first time a consumer expands them. Expansion also
eagerly caches every child directory's subtree, so a folder becomes
searchable as soon as its parent is opened anywhere in the tree.
"""

import logging
import threading
from typing import List, Optional

from ..ports.fs_port import FSPort, DirEntry
from ..domain.models import FileRecord, SearchRow, TreeNode
from ..domain.enums import NodeState, ROOT_LABEL
from ..domain.errors import AccessError, NotFoundError, handle_error
from .cache import CacheEngine, WalkBudget, WalkStats


logger = logging.getLogger(__name__)


class TreeModel:
    """
    Lazy tree of directory nodes backed by a shared CacheEngine.

    The synthetic root holds one child per filesystem root (drive).
    Expansion is idempotent: a second expand() of the same node touches
    neither the filesystem nor the cache.
    """

    def __init__(self, fs: FSPort, cache: CacheEngine, root_label: str = ROOT_LABEL):
        """
        Initialize the tree.

        Args:
            fs: Filesystem adapter (must be read-only)
            cache: Index shared with the search service
            root_label: Label of the synthetic root node
        """
        self.fs = fs
        self.cache = cache
        self.root = TreeNode.synthetic_root(root_label)
        self._drive_paths: List[str] = []

        for drive in fs.list_roots():
            self.root.add_child(TreeNode.for_directory(drive, label=drive))
            self._drive_paths.append(drive)

        # The synthetic root's children are known up front
        self.root.state = NodeState.EXPANDED

    @property
    def drives(self) -> List[TreeNode]:
        return self.root.directory_children()

    def expand(self, node: TreeNode) -> List[TreeNode]:
        """
        Materialize a node's directory children.

        Args:
            node: Node to expand

        Returns:
            The node's directory children (empty if listing failed)
        """
        if node.expanded or node.is_placeholder:
            return node.directory_children()

        node.children = [c for c in node.children if not c.is_placeholder]

        try:
            entries = self.fs.list_children(node.path)
        except (AccessError, NotFoundError) as e:
            handle_error(e, node.path, context="TreeModel")
            node.state = NodeState.EXPANDED
            return []

        self._attach(node, entries)
        node.state = NodeState.EXPANDED
        logger.debug("Expanded %s: %d directories", node.path, len(node.children))
        return node.directory_children()

    def _attach(self, node: TreeNode, entries: List[DirEntry]) -> None:
        """Attach directory children and cache everything listed."""
        self.cache.record_listing(node.path, entries)

        for entry in entries:
            if not entry.is_dir:
                continue
            node.add_child(TreeNode.for_directory(entry.path, label=entry.name))
            self.cache.cache_entry(entry)

    def list_directory(self, node: TreeNode) -> List[SearchRow]:
        """
        Rows for the table view of a directory: its directory children
        followed by the cached files it contains.
        """
        if node.path is None:
            return [
                SearchRow.from_record(self.cache.lookup(d.path) or FileRecord.from_path(d.path, True))
                for d in self.drives
            ]

        children = self.expand(node)
        rows = [
            SearchRow.from_record(self.cache.lookup(c.path) or FileRecord.from_path(c.path, True))
            for c in children
        ]
        rows.extend(
            SearchRow.from_record(record)
            for record in self.cache.children_of(node.path)
            if not record.is_dir
        )
        return rows

    def find(self, path: str) -> Optional[TreeNode]:
        """Locate an already-materialized node by path."""
        for node in self.root.walk():
            if node.path == path:
                return node
        return None

    def cache_roots(
        self,
        budget: Optional[WalkBudget] = None,
        cancel: Optional[threading.Event] = None,
    ) -> List[WalkStats]:
        """Eagerly cache the whole subtree of every drive."""
        results = []
        for drive in self._drive_paths:
            if cancel is not None and cancel.is_set():
                break
            record = FileRecord.from_path(drive, is_dir=True)
            results.append(self.cache.cache_entry(record, budget=budget, cancel=cancel))
        return results
