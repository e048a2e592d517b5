"""
ViewModels for the FSIndex app layer.

MVVM architecture separating presentation state from widgets:
- ViewModels handle state and commands
- Views (Qt widgets, not part of this package) handle rendering and input
- Services handle data access and operations
"""

from .base import BaseViewModel
from .explorer_vm import ExplorerVM
from .search_vm import SearchVM
from .coordinator import AppCoordinator

__all__ = [
    # Base
    "BaseViewModel",

    # ViewModels
    "ExplorerVM",
    "SearchVM",
    "AppCoordinator",
]
