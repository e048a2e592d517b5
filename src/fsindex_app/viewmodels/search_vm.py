"""
Search ViewModel for the search bar and results table.

Manages:
- Search query and File / Folder filter flags
- Result rows
"""

from typing import List, Optional, Set
from PyQt6.QtCore import pyqtSignal

from .base import BaseViewModel
from fsindex_core.domain.enums import EntryKind
from fsindex_core.domain.models import SearchRow
from fsindex_core.services.search import SearchService


class SearchVM(BaseViewModel):
    """
    ViewModel for search functionality.

    Signals:
        results_changed: Emitted when search results change
        filters_changed: Emitted when the File / Folder flags change

    State:
        query: Last executed query
        include_files: "File" checkbox
        include_dirs: "Folder" checkbox
        results: List of SearchRow
    """

    # Signals
    results_changed = pyqtSignal()
    filters_changed = pyqtSignal()

    def __init__(self, search_service: SearchService):
        """
        Initialize the ViewModel.

        Args:
            search_service: Service for search operations
        """
        super().__init__()

        self._search = search_service

        # State
        self._query: str = ""
        self._kinds: Set[EntryKind] = set()
        self._results: List[SearchRow] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def query(self) -> str:
        """Get the last executed query."""
        return self._query

    @property
    def include_files(self) -> bool:
        return EntryKind.FILE in self._kinds

    @property
    def include_dirs(self) -> bool:
        return EntryKind.FOLDER in self._kinds

    @property
    def results(self) -> List[SearchRow]:
        """Get the current search results."""
        return self._results.copy()

    @property
    def result_count(self) -> int:
        return len(self._results)

    @property
    def status_text(self) -> str:
        """Status bar text for the last search."""
        if not self._kinds:
            return "Select File and/or Folder to search"
        return f"{len(self._results):,} results"

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def set_kind(self, kind: EntryKind, enabled: bool) -> None:
        """
        Toggle a kind filter.

        Args:
            kind: EntryKind.FILE or EntryKind.FOLDER
            enabled: Checkbox state
        """
        before = set(self._kinds)
        if enabled:
            self._kinds.add(kind)
        else:
            self._kinds.discard(kind)
        if self._kinds != before:
            self.filters_changed.emit()

    def search(self, query: str, limit: Optional[int] = None) -> None:
        """
        Execute a search against the cached index.

        Args:
            query: Substring to look for ("" lists everything that passes the filter)
            limit: Maximum number of results
        """
        self._query = query.strip()
        self._results = self._search.query(
            self._query,
            include_files=self.include_files,
            include_dirs=self.include_dirs,
            limit=limit,
        )
        self.results_changed.emit()

    def clear_results(self) -> None:
        """Clear search results."""
        self._query = ""
        self._results = []
        self.results_changed.emit()
