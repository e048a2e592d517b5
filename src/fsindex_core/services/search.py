"""
Search Service - Query the path index.

Case-insensitive substring search over cached entry names, filtered by
kind. Reads the CacheEngine only; never touches the filesystem.
"""

from typing import List, Optional

from ..domain.models import FileRecord, SearchRow
from .cache import CacheEngine


class SearchService:
    """
    Stateless query layer over a CacheEngine.

    Results follow the cache's iteration order, which is deterministic
    for a fixed index snapshot.
    """

    def __init__(self, cache: CacheEngine):
        """
        Initialize the search service.

        Args:
            cache: Index to query
        """
        self.cache = cache

    def query(
        self,
        text: str,
        include_files: bool,
        include_dirs: bool,
        limit: Optional[int] = None,
    ) -> List[SearchRow]:
        """
        Search cached entries by name.

        Args:
            text: Substring to look for (case-insensitive, "" matches all)
            include_files: Keep non-directory entries
            include_dirs: Keep directory entries
            limit: Maximum results (None = unlimited)

        Returns:
            List of (name, extension-or-folder) rows
        """
        if not (include_files or include_dirs):
            return []

        needle = text.strip().lower()
        rows: List[SearchRow] = []

        for record in self.cache.all():
            if not self._kind_matches(record, include_files, include_dirs):
                continue
            if needle not in record.name.lower():
                continue
            rows.append(SearchRow.from_record(record))
            if limit is not None and len(rows) >= limit:
                break

        return rows

    def _kind_matches(self, record: FileRecord, include_files: bool, include_dirs: bool) -> bool:
        return (record.is_dir and include_dirs) or (not record.is_dir and include_files)

    def find_by_extension(self, ext: str, limit: Optional[int] = None) -> List[SearchRow]:
        """Files whose extension matches ``ext`` case-insensitively."""
        rows = []
        for record in self.cache.all():
            if record.is_dir or not record.matches_ext(ext):
                continue
            rows.append(SearchRow.from_record(record))
            if limit is not None and len(rows) >= limit:
                break
        return rows

    def get_file(self, path: str) -> Optional[FileRecord]:
        """Get a record by its path."""
        return self.cache.lookup(path)

    def get_stats(self) -> dict:
        """Get index statistics."""
        file_count = 0
        dir_count = 0
        for record in self.cache.all():
            if record.is_dir:
                dir_count += 1
            else:
                file_count += 1
        return {
            "file_count": file_count,
            "dir_count": dir_count,
            "total": file_count + dir_count,
        }
