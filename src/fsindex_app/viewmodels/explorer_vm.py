"""
Explorer ViewModel for the folder tree and directory table.

Manages:
- Lazy expansion of tree nodes
- Rows of the currently selected directory
- Opening entries with the OS default application
"""

import os
from typing import Optional, List
from PyQt6.QtCore import pyqtSignal, QUrl
from PyQt6.QtGui import QDesktopServices

from .base import BaseViewModel
from fsindex_core.domain.models import SearchRow, TreeNode
from fsindex_core.services.tree import TreeModel


class ExplorerVM(BaseViewModel):
    """
    ViewModel for the explorer pane.

    Signals:
        node_expanded(object): Emitted after a node got its real children (TreeNode)
        rows_changed: Emitted when the directory table changes
        error_occurred(str): Emitted when an entry cannot be opened

    State:
        root: Synthetic "All drives" node
        selected_node: Node shown in the table (None if none)
        rows: Table rows for the selected node
    """

    # Signals
    node_expanded = pyqtSignal(object)  # TreeNode
    rows_changed = pyqtSignal()
    error_occurred = pyqtSignal(str)

    def __init__(self, tree: TreeModel, opener=None):
        """
        Initialize the ViewModel.

        Args:
            tree: Lazy tree model
            opener: Callable taking a QUrl and returning success
                    (defaults to QDesktopServices.openUrl)
        """
        super().__init__()

        self._tree = tree
        self._opener = opener or QDesktopServices.openUrl

        # State
        self._selected_node: Optional[TreeNode] = None
        self._rows: List[SearchRow] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def root(self) -> TreeNode:
        """Get the synthetic root node."""
        return self._tree.root

    @property
    def selected_node(self) -> Optional[TreeNode]:
        """Get the node shown in the table."""
        return self._selected_node

    @property
    def rows(self) -> List[SearchRow]:
        """Get the table rows."""
        return self._rows.copy()

    @property
    def status_text(self) -> str:
        """Status bar text for the current selection."""
        if self._selected_node is None:
            return "Ready"
        return f"{self._selected_node.label}: {len(self._rows)} items"

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def expand(self, node: TreeNode) -> List[TreeNode]:
        """
        Expand a tree node (no-op if already expanded).

        Args:
            node: Node the user opened

        Returns:
            The node's directory children
        """
        was_expanded = node.expanded
        children = self._tree.expand(node)
        if not was_expanded:
            self.node_expanded.emit(node)
        return children

    def select(self, node: Optional[TreeNode]) -> None:
        """
        Show a directory in the table.

        Args:
            node: Node to show, or None to clear
        """
        self._selected_node = node
        if node is None or node.is_placeholder:
            self._rows = []
        else:
            was_expanded = node.expanded
            self._rows = self._tree.list_directory(node)
            if not was_expanded:
                self.node_expanded.emit(node)
        self.rows_changed.emit()

    def open_path(self, path: str) -> bool:
        """
        Open a file or folder with the default application.

        Args:
            path: Absolute path of the entry

        Returns:
            True if the OS accepted the request
        """
        resolved = os.path.abspath(path)
        if not os.path.exists(resolved):
            self.error_occurred.emit(f"Error opening file: {resolved} does not exist")
            return False

        if not self._opener(QUrl.fromLocalFile(resolved)):
            self.error_occurred.emit(f"Error opening file: {resolved}")
            return False
        return True

    def open_row(self, row: SearchRow) -> bool:
        """Open the entry behind a table row."""
        return self.open_path(row.path)
