"""
Domain models (DTOs) for FSIndex.

These are pure data classes with no database or filesystem dependencies.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, List, Iterator

from .enums import NodeState, FOLDER_LABEL, ROOT_LABEL, PLACEHOLDER_LABEL


def _split_name(path: str) -> str:
    """Final path component; a filesystem root is its own name."""
    return os.path.basename(path.rstrip("/\\")) or path


@dataclass(frozen=True)
class FileRecord:
    """A file or directory known to the index. `path` is the identity."""
    path: str                    # Absolute path, unique key
    name: str                    # Final path component
    is_dir: bool

    @classmethod
    def from_path(cls, path: str, is_dir: bool) -> "FileRecord":
        """Build a record from an absolute path."""
        return cls(path=path, name=_split_name(path), is_dir=is_dir)

    @property
    def ext(self) -> str:
        """Text after the last dot of a file name, original case kept."""
        if self.is_dir or "." not in self.name:
            return ""
        return self.name[self.name.rindex(".") + 1:]

    @property
    def kind_label(self) -> str:
        """Value of the extension column: extension for files, folder label otherwise."""
        return FOLDER_LABEL if self.is_dir else self.ext

    @property
    def parent(self) -> str:
        """Parent directory path ("" for a filesystem root)."""
        parent = os.path.dirname(self.path)
        return "" if parent == self.path else parent

    def matches_ext(self, ext: str) -> bool:
        """Case-insensitive extension comparison (leading dot ignored)."""
        return self.ext.lower() == ext.lower().lstrip(".")


@dataclass
class WalkBudget:
    """Limits for one recursive caching walk. None means unbounded."""
    max_depth: Optional[int] = None      # Deepest directory level that is listed (root = 0)
    max_entries: Optional[int] = None    # Max records inserted by one walk
    max_seconds: Optional[float] = None  # Wall-clock limit for one walk


@dataclass
class SearchRow:
    """A (name, extension-or-folder) row as shown in the results table."""
    name: str
    kind_label: str
    path: str
    is_dir: bool

    @classmethod
    def from_record(cls, record: FileRecord) -> "SearchRow":
        return cls(
            name=record.name,
            kind_label=record.kind_label,
            path=record.path,
            is_dir=record.is_dir,
        )


@dataclass(eq=False)
class TreeNode:
    """
    A directory in the navigable hierarchy.

    A fresh node is UNEXPANDED and owns exactly one placeholder child.
    Expansion replaces the placeholder with the real directory children;
    nodes are never removed afterwards.
    """
    path: Optional[str]          # None for the synthetic root and placeholders
    label: str
    state: NodeState = NodeState.UNEXPANDED
    children: List["TreeNode"] = field(default_factory=list)
    parent: Optional["TreeNode"] = field(default=None, repr=False)
    is_placeholder: bool = False

    @classmethod
    def placeholder(cls) -> "TreeNode":
        return cls(path=None, label=PLACEHOLDER_LABEL, state=NodeState.EXPANDED,
                   is_placeholder=True)

    @classmethod
    def for_directory(cls, path: str, label: Optional[str] = None) -> "TreeNode":
        """Create an unexpanded directory node with its placeholder child."""
        node = cls(path=path, label=label or _split_name(path))
        node.add_child(cls.placeholder())
        return node

    @classmethod
    def synthetic_root(cls, label: str = ROOT_LABEL) -> "TreeNode":
        return cls(path=None, label=label)

    @property
    def expanded(self) -> bool:
        return self.state is NodeState.EXPANDED

    @property
    def is_root(self) -> bool:
        return self.parent is None and not self.is_placeholder

    @property
    def has_placeholder(self) -> bool:
        return len(self.children) == 1 and self.children[0].is_placeholder

    def add_child(self, child: "TreeNode") -> "TreeNode":
        child.parent = self
        self.children.append(child)
        return child

    def directory_children(self) -> List["TreeNode"]:
        """Real children, placeholders excluded."""
        return [c for c in self.children if not c.is_placeholder]

    def walk(self) -> Iterator["TreeNode"]:
        """Depth-first iteration over this node and its materialized descendants."""
        yield self
        for child in self.directory_children():
            yield from child.walk()

    def __str__(self) -> str:
        return self.label
