"""
Adapters for FSIndex.

Implementations of the port interfaces.
"""

from .local_fs import LocalFS
from .sqlite_store import SqliteIndexStore

__all__ = ["LocalFS", "SqliteIndexStore"]
