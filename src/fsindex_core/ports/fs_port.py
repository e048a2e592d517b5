"""
Filesystem port interface.

Defines the contract for filesystem access.
All implementations MUST be read-only.
"""

from abc import ABC, abstractmethod
from typing import List
from dataclasses import dataclass


@dataclass(frozen=True)
class DirEntry:
    """An immediate child of a listed directory."""
    path: str
    name: str
    is_dir: bool


class FSPort(ABC):
    """
    Abstract interface for filesystem enumeration.

    Listing failures are normalized: implementations raise
    ``AccessError`` when permission is denied and ``NotFoundError``
    when the path no longer exists or is not a directory.
    """

    @abstractmethod
    def list_children(self, path: str) -> List[DirEntry]:
        """
        List the immediate children of a directory.

        Args:
            path: Directory to list

        Returns:
            Entries in the order the filesystem reports them

        Raises:
            AccessError: Permission denied
            NotFoundError: Path vanished or is not a directory
        """
        pass

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Check if path is a directory."""
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        pass

    @abstractmethod
    def list_roots(self) -> List[str]:
        """Filesystem roots (drives) used to seed the navigation tree."""
        pass

    def real_path(self, path: str) -> str:
        """Canonical form of ``path`` used to detect directory cycles."""
        return path
