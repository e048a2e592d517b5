"""
App Coordinator for cross-ViewModel communication.

Handles:
- Session startup / shutdown
- Background caching of drives
- Tree expansion / search / caching -> status bar text
"""

from typing import Optional
from PyQt6.QtCore import QObject, pyqtSignal

from .explorer_vm import ExplorerVM
from .search_vm import SearchVM
from fsindex_core.config import configure_logging
from fsindex_core.services.session import IndexSession
from fsindex_app.workers.cache_worker import CacheWorker


class AppCoordinator(QObject):
    """
    Coordinates the session and the ViewModels.

    Responsibilities:
    - Open the session (index loaded from disk) and build the ViewModels
    - Cache drives in a background worker instead of blocking startup
    - Forward status text from every ViewModel to one signal
    - Flush the index on shutdown
    """

    # Signal emitted when status bar should update
    status_message = pyqtSignal(str, int)  # message, timeout_ms

    def __init__(self, session: IndexSession):
        """
        Initialize the coordinator.

        Args:
            session: Session owning the index (opened here if needed)
        """
        super().__init__()

        self._session = session
        configure_logging(session.config.log_level)

        warm = session.config.cache_roots_on_start
        if not session.is_open:
            session.open(cache_roots=False)

        self.explorer_vm = ExplorerVM(session.tree)
        self.search_vm = SearchVM(session.search)
        self._worker: Optional[CacheWorker] = None

        self._connect_signals()

        if warm:
            self.start_caching([d.path for d in session.tree.drives])

    @property
    def session(self) -> IndexSession:
        return self._session

    @property
    def caching_in_progress(self) -> bool:
        return self._worker is not None and self._worker.isRunning()

    def _connect_signals(self) -> None:
        """Connect ViewModel signals to status updates."""
        self.search_vm.results_changed.connect(self._on_search_results_changed)
        self.explorer_vm.rows_changed.connect(self._on_rows_changed)
        self.explorer_vm.error_occurred.connect(self._on_error)

    # -------------------------------------------------------------------------
    # Background caching
    # -------------------------------------------------------------------------

    def start_caching(self, paths: list) -> CacheWorker:
        """
        Cache directory subtrees in a background thread.

        Args:
            paths: Directories to cache

        Returns:
            The started worker
        """
        self.cancel_caching()
        worker = CacheWorker(
            self._session.cache,
            paths,
            budget=self._session.config.walk_budget(),
        )
        worker.progress.connect(self._on_cache_progress)
        worker.finished.connect(self._on_cache_finished)
        self._worker = worker
        worker.start()
        return worker

    def cancel_caching(self) -> None:
        """Stop a running background walk and wait for it."""
        if self._worker is not None and self._worker.isRunning():
            self._worker.cancel()
            self._worker.wait()
        self._worker = None

    def shutdown(self) -> bool:
        """Stop background work and flush the index to disk."""
        self.cancel_caching()
        return self._session.close()

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def _on_search_results_changed(self) -> None:
        self.status_message.emit(self.search_vm.status_text, 5000)

    def _on_rows_changed(self) -> None:
        self.status_message.emit(self.explorer_vm.status_text, 0)

    def _on_error(self, message: str) -> None:
        self.status_message.emit(message, 5000)

    def _on_cache_progress(self, dirs: int, entries: int, current_path: str) -> None:
        self.status_message.emit(f"Caching {current_path} ({entries:,} entries)", 0)

    def _on_cache_finished(self, complete: bool, message: str) -> None:
        self.status_message.emit(message, 5000)
