"""
Background worker threads for FSIndex.

These QThread subclasses run long operations without blocking the UI.
"""

from .cache_worker import CacheWorker

__all__ = [
    "CacheWorker",
]
