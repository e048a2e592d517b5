"""
SQLite Index Store Adapter.

Persists the path -> FileRecord index as a single SQLite file.
Saves are whole-file rewrites: a fresh database is written next to the
target and swapped in with an atomic rename.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import Dict, Iterable
from contextlib import closing

from ..ports.store_port import StorePort
from ..domain.models import FileRecord
from ..domain.errors import PersistenceError, handle_error


logger = logging.getLogger(__name__)


# SQL Schema
SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS files (
    path TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    is_dir INTEGER NOT NULL DEFAULT 0,
    ext TEXT NOT NULL DEFAULT ''
);
"""


class SqliteIndexStore(StorePort):
    """SQLite implementation of the index store port."""

    def __init__(self, db_path: Path):
        """
        Initialize the store.

        Args:
            db_path: Path to the SQLite index file
        """
        self.db_path = Path(db_path)

    @property
    def _tmp_path(self) -> Path:
        return self.db_path.with_name(self.db_path.name + ".tmp")

    def load(self) -> Dict[str, FileRecord]:
        """Load all records; any failure yields an empty index."""
        try:
            if not self.db_path.is_file():
                logger.info("No index file at %s, starting fresh", self.db_path)
                return {}
            records = self._read_records()
        except (sqlite3.Error, OSError, ValueError) as e:
            handle_error(
                PersistenceError(f"Cannot read index: {e}", path=str(self.db_path)),
                context="SqliteIndexStore",
            )
            return {}

        logger.info("Loaded %d records from %s", len(records), self.db_path)
        return records

    def _read_records(self) -> Dict[str, FileRecord]:
        uri = self.db_path.resolve().as_uri() + "?mode=ro"
        with closing(sqlite3.connect(uri, uri=True)) as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute("SELECT path, name, is_dir FROM files").fetchall()

        records: Dict[str, FileRecord] = {}
        for row in rows:
            record = self._row_to_record(row)
            records[record.path] = record
        return records

    def _row_to_record(self, row) -> FileRecord:
        if not isinstance(row["path"], str) or not isinstance(row["name"], str):
            raise ValueError(f"Malformed record: {tuple(row)!r}")
        return FileRecord(
            path=row["path"],
            name=row["name"],
            is_dir=bool(row["is_dir"]),
        )

    def save(self, records: Iterable[FileRecord]) -> int:
        """Write ``records`` to a fresh file and swap it over the old one."""
        tmp_path = self._tmp_path
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            if tmp_path.exists():
                tmp_path.unlink()

            with closing(sqlite3.connect(str(tmp_path))) as conn:
                conn.executescript(SCHEMA_SQL)
                rows = [(r.path, r.name, 1 if r.is_dir else 0, r.ext) for r in records]
                with conn:
                    conn.executemany(
                        "INSERT OR REPLACE INTO files (path, name, is_dir, ext) VALUES (?, ?, ?, ?)",
                        rows,
                    )
                count = len(rows)

            os.replace(tmp_path, self.db_path)
        except (sqlite3.Error, OSError) as e:
            try:
                tmp_path.unlink()
            except OSError:
                pass
            raise PersistenceError(f"Cannot write index: {e}", path=str(self.db_path)) from e

        logger.info("Saved %d records to %s", count, self.db_path)
        return count
