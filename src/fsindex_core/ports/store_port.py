"""
Index store port interface.

Defines the contract for persisting the path -> FileRecord index
between sessions.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable

from ..domain.models import FileRecord


class StorePort(ABC):
    """
    Abstract interface for index persistence.

    Implementations store plain records only and always write the full
    snapshot (no incremental merge).
    """

    @abstractmethod
    def load(self) -> Dict[str, FileRecord]:
        """
        Load the persisted index.

        Never raises: a missing, corrupt or unreadable file yields an
        empty mapping.
        """
        pass

    @abstractmethod
    def save(self, records: Iterable[FileRecord]) -> int:
        """
        Replace the persisted index with ``records``.

        Returns:
            Number of records written

        Raises:
            PersistenceError: The index file could not be written
        """
        pass
