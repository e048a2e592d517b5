"""
Cache worker thread.

Runs an eager caching walk in the background without blocking the UI.
"""

import logging
import threading
from typing import Optional

from PyQt6.QtCore import QThread, pyqtSignal

from fsindex_core.domain.models import FileRecord, WalkBudget
from fsindex_core.services.cache import CacheEngine


logger = logging.getLogger(__name__)


class CacheWorker(QThread):
    """
    Background thread for caching directory subtrees.

    Signals:
        progress(int, int, str): Emitted during the walk with (dirs_scanned, entries_cached, current_path)
        finished(bool, str): Emitted when the walk ends with (complete, message)
    """

    progress = pyqtSignal(int, int, str)  # dirs, entries, current_path
    finished = pyqtSignal(bool, str)  # complete, message

    def __init__(self, cache: CacheEngine, paths: list, budget: Optional[WalkBudget] = None):
        """
        Initialize the worker.

        Args:
            cache: The cache engine to fill
            paths: Directory paths whose subtrees are cached
            budget: Optional walk limits
        """
        super().__init__()
        self.cache = cache
        self.paths = list(paths)
        self.budget = budget
        self._cancel = threading.Event()

    def cancel(self):
        """Ask the walk to stop at the next directory."""
        self._cancel.set()

    def run(self):
        """Run the caching walk."""
        try:
            def on_progress(s):
                self.progress.emit(s.dirs_scanned, s.entries_cached, s.current_path)

            dirs = 0
            entries = 0
            complete = True
            for path in self.paths:
                if self._cancel.is_set():
                    complete = False
                    break
                stats = self.cache.cache_entry(
                    FileRecord.from_path(path, is_dir=True),
                    budget=self.budget,
                    cancel=self._cancel,
                    progress_callback=on_progress,
                )
                dirs += stats.dirs_scanned
                entries += stats.entries_cached
                complete = complete and stats.is_complete

            state = "complete" if complete else "stopped early"
            self.finished.emit(
                complete,
                f"Caching {state}: {entries:,} entries in {dirs:,} directories"
            )
        except Exception as e:
            logger.exception("Caching walk failed")
            self.finished.emit(False, f"Caching failed: {e}")
