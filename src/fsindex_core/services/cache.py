"""
Cache Engine - the in-memory path index.

Owns the path -> FileRecord index. Caching a directory eagerly walks its
whole subtree so its contents become searchable the moment any ancestor
is expanded. Uses only directory listings - never reads file contents.

Known limitation: records are never removed. Paths deleted from disk
stay in the index (and in the persisted file) until the file is deleted.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..ports.fs_port import FSPort, DirEntry
from ..domain.models import FileRecord, WalkBudget
from ..domain.errors import AccessError, NotFoundError, handle_error


logger = logging.getLogger(__name__)


@dataclass
class WalkStats:
    """Progress information for a caching walk."""
    root_path: str
    dirs_scanned: int = 0
    entries_cached: int = 0
    errors: int = 0
    skipped_cycles: int = 0
    current_path: str = ""
    truncated: bool = False
    cancelled: bool = False

    @property
    def is_complete(self) -> bool:
        return not (self.truncated or self.cancelled)


class CacheEngine:
    """
    Service owning the index and performing eager subtree caching.

    Thread safety: every read and write of the index happens under one
    lock, but the lock is never held across a filesystem call. A long
    walk therefore inserts records incrementally and concurrent lookups
    and searches observe partial progress.
    """

    def __init__(self, fs: FSPort, default_budget: Optional[WalkBudget] = None):
        """
        Initialize the cache engine.

        Args:
            fs: Filesystem adapter (must be read-only)
            default_budget: Budget applied when cache_entry() gets none
        """
        self.fs = fs
        self.default_budget = default_budget or WalkBudget()
        self._lock = threading.RLock()
        self._index: Dict[str, FileRecord] = {}
        self._children: Dict[str, Dict[str, None]] = {}  # parent -> ordered child paths
        self._listed: Dict[str, str] = {}                 # real path -> path it was listed as

    # === Index access ===

    def lookup(self, path: str) -> Optional[FileRecord]:
        """Get the record for a path, or None."""
        with self._lock:
            return self._index.get(path)

    def all(self) -> Iterator[FileRecord]:
        """Iterate over a snapshot of every record."""
        with self._lock:
            records = list(self._index.values())
        return iter(records)

    def children_of(self, path: str) -> List[FileRecord]:
        """Cached direct children of a directory, in insertion order."""
        with self._lock:
            paths = list(self._children.get(path, ()))
            return [self._index[p] for p in paths]

    def snapshot(self) -> Dict[str, FileRecord]:
        """Copy of the whole index (used when flushing to the store)."""
        with self._lock:
            return dict(self._index)

    def load(self, records: Union[Dict[str, FileRecord], Iterable[FileRecord]]) -> int:
        """Bulk-insert records (used at startup). Returns the number inserted."""
        if isinstance(records, dict):
            records = records.values()
        count = 0
        with self._lock:
            for record in records:
                self._put_locked(record)
                count += 1
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._index)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._index

    def _put(self, record: FileRecord) -> None:
        with self._lock:
            self._put_locked(record)

    def _put_locked(self, record: FileRecord) -> None:
        self._index[record.path] = record
        parent = record.parent
        if parent:
            self._children.setdefault(parent, {})[record.path] = None

    # === Caching ===

    def cache_entry(
        self,
        entry: Union[FileRecord, DirEntry],
        budget: Optional[WalkBudget] = None,
        cancel: Optional[threading.Event] = None,
        progress_callback: Optional[Callable[[WalkStats], None]] = None,
    ) -> WalkStats:
        """
        Insert or overwrite the record for ``entry``; for a directory,
        recursively cache its whole subtree.

        Listing failures (AccessError / NotFoundError) skip the offending
        subtree and the walk continues with its siblings. Budget overruns
        and cancellation stop the walk and are reported in the result,
        never raised.

        Args:
            entry: Record or directory entry to cache
            budget: Limits for the walk (defaults to ``default_budget``)
            cancel: Event that stops the walk when set
            progress_callback: Called every few directories with progress

        Returns:
            Final WalkStats
        """
        record = self._to_record(entry)
        budget = budget or self.default_budget
        stats = WalkStats(root_path=record.path, current_path=record.path)

        self._put(record)
        stats.entries_cached += 1

        if record.is_dir:
            started = time.monotonic()
            self._walk(record.path, budget, cancel, stats, progress_callback)
            logger.info(
                "Cached %s: %d entries in %d directories (%.2fs)%s",
                record.path, stats.entries_cached, stats.dirs_scanned,
                time.monotonic() - started,
                "" if stats.is_complete else " [incomplete]",
            )

        if progress_callback:
            progress_callback(stats)
        return stats

    def _to_record(self, entry: Union[FileRecord, DirEntry]) -> FileRecord:
        if isinstance(entry, FileRecord):
            return entry
        return FileRecord(path=entry.path, name=entry.name, is_dir=entry.is_dir)

    def _walk(
        self,
        root_path: str,
        budget: WalkBudget,
        cancel: Optional[threading.Event],
        stats: WalkStats,
        progress_callback: Optional[Callable[[WalkStats], None]],
    ) -> None:
        """Depth-first walk with an explicit stack, bounded by ``budget``."""
        deadline = None
        if budget.max_seconds is not None:
            deadline = time.monotonic() + budget.max_seconds

        visited = set()
        stack: List[Tuple[str, int]] = [(root_path, 0)]

        while stack:
            if cancel is not None and cancel.is_set():
                stats.cancelled = True
                logger.info("Walk of %s cancelled", root_path)
                return

            if deadline is not None and time.monotonic() > deadline:
                stats.truncated = True
                logger.warning("Walk of %s exceeded %.1fs, stopping", root_path, budget.max_seconds)
                return

            dir_path, depth = stack.pop()

            if budget.max_depth is not None and depth > budget.max_depth:
                stats.truncated = True
                continue

            real = self.fs.real_path(dir_path)
            if real in visited:
                stats.skipped_cycles += 1
                logger.debug("Directory cycle at %s, skipping", dir_path)
                continue
            visited.add(real)

            stats.current_path = dir_path
            stats.dirs_scanned += 1

            # Report progress periodically
            if progress_callback and stats.dirs_scanned % 10 == 0:
                progress_callback(stats)

            with self._lock:
                listed_as = self._listed.get(real)

            if listed_as is not None:
                # Already listed this session: descend through the cache
                subdirs = [r.path for r in self.children_of(listed_as) if r.is_dir]
            else:
                try:
                    children = self.fs.list_children(dir_path)
                except (AccessError, NotFoundError) as e:
                    stats.errors += 1
                    handle_error(e, dir_path, context="CacheEngine")
                    continue

                subdirs = []
                for child in children:
                    if budget.max_entries is not None and stats.entries_cached >= budget.max_entries:
                        stats.truncated = True
                        logger.warning(
                            "Walk of %s reached %d entries, stopping", root_path, budget.max_entries
                        )
                        return
                    self._put(self._to_record(child))
                    stats.entries_cached += 1
                    if child.is_dir:
                        subdirs.append(child.path)

                with self._lock:
                    self._listed[real] = dir_path

            stack.extend((p, depth + 1) for p in reversed(subdirs))

    def record_listing(self, dir_path: str, entries: Iterable[DirEntry]) -> int:
        """
        Insert the immediate children of an already-listed directory
        without walking them, and remember the directory as listed.
        """
        real = self.fs.real_path(dir_path)
        count = 0
        with self._lock:
            for entry in entries:
                self._put_locked(self._to_record(entry))
                count += 1
            self._listed[real] = dir_path
        return count

    def is_listed(self, path: str) -> bool:
        """Whether the directory was fully listed during this session."""
        real = self.fs.real_path(path)
        with self._lock:
            return real in self._listed
