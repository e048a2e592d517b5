"""
Ports (interfaces) for FSIndex.

These define the contracts that adapters must implement.
This enables dependency injection and testing with fakes.
"""

from .fs_port import FSPort, DirEntry
from .store_port import StorePort

__all__ = ["FSPort", "DirEntry", "StorePort"]
