"""
Services for FSIndex.

Business logic for caching, tree navigation, searching and the session
lifecycle.
"""

from .cache import CacheEngine, WalkBudget, WalkStats
from .tree import TreeModel
from .search import SearchService
from .session import IndexSession

__all__ = [
    "CacheEngine",
    "WalkBudget",
    "WalkStats",
    "TreeModel",
    "SearchService",
    "IndexSession",
]
