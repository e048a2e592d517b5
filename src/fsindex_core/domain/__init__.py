"""
Domain models for FSIndex.

Contains DTOs, enums, and the error taxonomy used throughout the library.
"""

from .models import (
    FileRecord,
    SearchRow,
    TreeNode,
    WalkBudget,
)
from .enums import (
    NodeState,
    EntryKind,
    FOLDER_LABEL,
    ROOT_LABEL,
)
from .errors import (
    FsIndexError,
    AccessError,
    NotFoundError,
    PersistenceError,
)

__all__ = [
    # Models
    "FileRecord",
    "SearchRow",
    "TreeNode",
    "WalkBudget",
    # Enums
    "NodeState",
    "EntryKind",
    "FOLDER_LABEL",
    "ROOT_LABEL",
    # Errors
    "FsIndexError",
    "AccessError",
    "NotFoundError",
    "PersistenceError",
]
