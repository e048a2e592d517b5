"""
FSIndex Core - Headless library for lazy filesystem indexing.

This module provides a lazily expanded directory tree, an eagerly
populated path index built while the tree is explored, persistence of
that index between runs, and name search over it. It has no UI
dependencies and can be embedded in other applications.

Safety: All file operations are READ-ONLY.
"""

__version__ = "0.1.0"

# Lazy imports to avoid loading everything at once
def __getattr__(name):
    if name == "LocalFS":
        from .adapters.local_fs import LocalFS
        return LocalFS
    elif name == "SqliteIndexStore":
        from .adapters.sqlite_store import SqliteIndexStore
        return SqliteIndexStore
    elif name == "CacheEngine":
        from .services.cache import CacheEngine
        return CacheEngine
    elif name == "TreeModel":
        from .services.tree import TreeModel
        return TreeModel
    elif name == "SearchService":
        from .services.search import SearchService
        return SearchService
    elif name == "IndexSession":
        from .services.session import IndexSession
        return IndexSession
    elif name == "FsIndexConfig":
        from .config import FsIndexConfig
        return FsIndexConfig
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "__version__",
    "LocalFS",
    "SqliteIndexStore",
    "CacheEngine",
    "TreeModel",
    "SearchService",
    "IndexSession",
    "FsIndexConfig",
]
