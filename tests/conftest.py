"""
Shared test fixtures.

FakeFS is an in-memory FSPort: a mapping of directory path -> child
names (a trailing "/" marks a directory). It records every listing so
tests can assert how often the filesystem was touched.
"""

import posixpath
import threading
from typing import Dict, Iterable, List, Optional

import pytest

from fsindex_core.ports.fs_port import FSPort, DirEntry
from fsindex_core.domain.errors import AccessError, NotFoundError


class FakeFS(FSPort):
    """In-memory filesystem with injectable failures."""

    def __init__(
        self,
        layout: Dict[str, List[str]],
        roots: Optional[List[str]] = None,
        denied: Iterable[str] = (),
        aliases: Optional[Dict[str, str]] = None,
    ):
        self.layout = layout
        self.roots = roots or ["/"]
        self.denied = set(denied)
        self.aliases = aliases or {}
        self.calls: List[str] = []
        self.gates: Dict[str, threading.Event] = {}
        self.entered: Dict[str, threading.Event] = {}

    def block(self, path: str) -> threading.Event:
        """Make list_children(path) wait until the returned event is set."""
        self.gates[path] = threading.Event()
        self.entered[path] = threading.Event()
        return self.gates[path]

    def list_children(self, path: str) -> List[DirEntry]:
        self.calls.append(path)
        if path in self.gates:
            self.entered[path].set()
            self.gates[path].wait(timeout=5)
        if path in self.denied:
            raise AccessError(f"Permission denied: {path}", path=path)
        if path not in self.layout:
            raise NotFoundError(f"No such directory: {path}", path=path)

        entries = []
        for child in self.layout[path]:
            name = child.rstrip("/")
            entries.append(DirEntry(
                path=posixpath.join(path, name),
                name=name,
                is_dir=child.endswith("/"),
            ))
        return entries

    def is_dir(self, path: str) -> bool:
        return path in self.layout or path in self.denied

    def exists(self, path: str) -> bool:
        if self.is_dir(path):
            return True
        parent, name = posixpath.split(path)
        return name in self.layout.get(parent, [])

    def list_roots(self) -> List[str]:
        return list(self.roots)

    def real_path(self, path: str) -> str:
        return self.aliases.get(path, path)


@pytest.fixture
def fake_fs_class():
    """The FakeFS class, for tests building their own layouts."""
    return FakeFS


@pytest.fixture
def project_fs():
    """
    A small tree:

        /data
        ├── docs/
        │   ├── report.txt
        │   └── drafts/
        │       └── Draft.DOCX
        ├── archive.tar.gz
        └── README
        /other
        └── hidden.txt
    """
    return FakeFS(
        {
            "/data": ["docs/", "archive.tar.gz", "README"],
            "/data/docs": ["report.txt", "drafts/"],
            "/data/docs/drafts": ["Draft.DOCX"],
            "/other": ["hidden.txt"],
        },
        roots=["/data", "/other"],
    )
