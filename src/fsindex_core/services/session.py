"""
Index Session - startup / shutdown lifecycle of the index.

Wires the filesystem adapter, the persisted store, the cache, the tree
and the search service together. The cache is loaded once at startup and
flushed once at shutdown. An atexit hook covers interpreter exits that
skip the explicit close(), and SIGTERM / SIGHUP handlers (installed when
the session is opened on the main thread) flush before the process dies.
"""

import atexit
import logging
import signal
import threading
from typing import Dict, Optional

from ..config import FsIndexConfig
from ..ports.fs_port import FSPort
from ..ports.store_port import StorePort
from ..adapters.local_fs import LocalFS
from ..adapters.sqlite_store import SqliteIndexStore
from ..domain.errors import PersistenceError, handle_error
from .cache import CacheEngine
from .tree import TreeModel
from .search import SearchService


logger = logging.getLogger(__name__)


# Termination signals that get a flush-then-chain handler
SHUTDOWN_SIGNALS = [
    getattr(signal, name) for name in ("SIGTERM", "SIGHUP") if hasattr(signal, name)
]


class IndexSession:
    """
    Owns one CacheEngine for the lifetime of an application run.

    Usage:
        with IndexSession(FsIndexConfig.from_env()) as session:
            session.tree.expand(session.tree.drives[0])
            rows = session.search.query("report", True, False)
    """

    def __init__(
        self,
        config: Optional[FsIndexConfig] = None,
        fs: Optional[FSPort] = None,
        store: Optional[StorePort] = None,
    ):
        """
        Initialize the session (nothing is loaded until open()).

        Args:
            config: Session configuration (defaults to FsIndexConfig())
            fs: Filesystem adapter (defaults to LocalFS)
            store: Index store (defaults to SqliteIndexStore at config.index_path)
        """
        self.config = config or FsIndexConfig()
        self.fs = fs or LocalFS()
        self.store = store or SqliteIndexStore(self.config.index_path)

        self.cache = CacheEngine(self.fs, default_budget=self.config.walk_budget())
        self.search = SearchService(self.cache)
        self.tree: Optional[TreeModel] = None
        self._is_open = False
        self._previous_handlers: Dict[int, object] = {}

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self, cache_roots: Optional[bool] = None) -> "IndexSession":
        """
        Load the persisted index and build the navigation tree.

        Args:
            cache_roots: Eagerly cache every drive now (defaults to
                         config.cache_roots_on_start)
        """
        if self._is_open:
            return self

        loaded = self.cache.load(self.store.load())
        logger.info("Session opened with %d cached records", loaded)

        self.tree = TreeModel(self.fs, self.cache)
        self._is_open = True
        atexit.register(self.close)
        self._install_signal_handlers()

        if cache_roots is None:
            cache_roots = self.config.cache_roots_on_start
        if cache_roots:
            self.tree.cache_roots(budget=self.config.walk_budget())

        return self

    def flush(self) -> bool:
        """Write the current index snapshot to the store."""
        try:
            self.store.save(self.cache.all())
            return True
        except PersistenceError as e:
            handle_error(e, context="IndexSession")
            return False

    def close(self) -> bool:
        """Flush the index and end the session. Safe to call twice."""
        if not self._is_open:
            return True
        self._is_open = False
        atexit.unregister(self.close)
        self._restore_signal_handlers()
        return self.flush()

    # === Termination signals ===

    def _install_signal_handlers(self) -> None:
        # signal.signal() only works on the main thread
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Session opened off the main thread, no signal handlers")
            return
        for signum in SHUTDOWN_SIGNALS:
            previous = signal.getsignal(signum)
            if previous is signal.SIG_IGN:
                continue
            self._previous_handlers[signum] = previous
            signal.signal(signum, self._on_shutdown_signal)

    def _restore_signal_handlers(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            return
        while self._previous_handlers:
            signum, previous = self._previous_handlers.popitem()
            if signal.getsignal(signum) == self._on_shutdown_signal:
                signal.signal(signum, signal.SIG_DFL if previous is None else previous)

    def _on_shutdown_signal(self, signum, frame) -> None:
        """Flush, then hand the signal to whatever handled it before."""
        previous = self._previous_handlers.get(signum, signal.SIG_DFL)
        logger.info("Received signal %d, flushing index", signum)
        self.close()

        if callable(previous):
            previous(signum, frame)
        elif previous is None or previous == signal.SIG_DFL:
            signal.signal(signum, signal.SIG_DFL)
            signal.raise_signal(signum)

    def __enter__(self) -> "IndexSession":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
