"""
Local Filesystem Adapter.

SAFETY: This is the ONLY way FSIndex touches the filesystem.
All operations are strictly read-only: list, stat, nothing else.

OS errors are normalized to AccessError / NotFoundError so callers can
treat an unreadable or vanished directory as having zero children.
"""

import os
import string
from pathlib import Path
from typing import List, Optional

from ..ports.fs_port import FSPort, DirEntry
from ..domain.errors import AccessError, NotFoundError


class LocalFS(FSPort):
    """
    Read-only local filesystem implementation.

    SAFETY GUARANTEES:
    - No write, delete, move or rename operations
    - Symlinks are never followed when classifying entries
    - Optional allowed roots restrict enumeration to given subtrees
    """

    def __init__(self, allowed_roots: Optional[List[Path]] = None):
        """
        Initialize the filesystem adapter.

        Args:
            allowed_roots: If provided, only allow access under these paths.
                          They also replace the drive list as tree roots.
        """
        self.allowed_roots = [Path(r).resolve() for r in (allowed_roots or [])]
        self._list_count = 0

    def _validate_path(self, path: str) -> Path:
        """Check a path against allowed roots (resolved only when roots are set)."""
        if not self.allowed_roots:
            return Path(path)

        resolved = Path(path).resolve()
        if not any(self._is_under(resolved, root) for root in self.allowed_roots):
            raise AccessError(
                f"Path {resolved} is not under any allowed root. "
                f"Allowed roots: {self.allowed_roots}",
                path=str(path),
            )
        return resolved

    def _is_under(self, path: Path, root: Path) -> bool:
        """Check if path is under root."""
        try:
            path.relative_to(root)
            return True
        except ValueError:
            return False

    def list_children(self, path: str) -> List[DirEntry]:
        """List the immediate children of a directory."""
        self._validate_path(path)
        self._list_count += 1

        entries: List[DirEntry] = []
        try:
            with os.scandir(path) as it:
                for entry in it:
                    try:
                        is_dir = entry.is_dir(follow_symlinks=False)
                    except OSError:
                        # Entry vanished or cannot be stat'ed
                        continue
                    entries.append(DirEntry(path=entry.path, name=entry.name, is_dir=is_dir))
        except PermissionError as e:
            raise AccessError(f"Permission denied: {path}", path=path) from e
        except (FileNotFoundError, NotADirectoryError) as e:
            raise NotFoundError(f"No such directory: {path}", path=path) from e
        except OSError as e:
            raise AccessError(f"Cannot list {path}: {e}", path=path) from e

        return entries

    def is_dir(self, path: str) -> bool:
        """Check if path is a directory (symlinks not followed)."""
        try:
            self._validate_path(path)
            return os.path.isdir(path) and not os.path.islink(path)
        except (AccessError, OSError):
            return False

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        try:
            self._validate_path(path)
            return os.path.lexists(path)
        except (AccessError, OSError):
            return False

    def list_roots(self) -> List[str]:
        """Drives on Windows, ``/`` elsewhere; allowed roots when configured."""
        if self.allowed_roots:
            return [str(r) for r in self.allowed_roots]

        if os.name == "nt":
            drives = [f"{letter}:\\" for letter in string.ascii_uppercase]
            return [d for d in drives if os.path.exists(d)]

        return [os.sep]

    def real_path(self, path: str) -> str:
        """Resolved path with symlinks and junctions collapsed."""
        try:
            return os.path.realpath(path)
        except OSError:
            return path

    @property
    def stats(self) -> dict:
        """Get listing statistics."""
        return {
            "list_count": self._list_count,
        }
