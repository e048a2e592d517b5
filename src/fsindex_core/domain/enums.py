"""
Enumerations for FSIndex domain.
"""

from enum import Enum


class NodeState(str, Enum):
    """Lifecycle of a directory node in the navigation tree."""
    UNEXPANDED = "unexpanded"   # Holds a single placeholder child
    EXPANDED = "expanded"       # Real children attached (terminal)


class EntryKind(str, Enum):
    """Kind filter used by search."""
    FILE = "file"
    FOLDER = "folder"

    @property
    def label(self) -> str:
        """Display label for the kind column."""
        return "Folder" if self is EntryKind.FOLDER else "File"


# Label shown in the extension column for directories
FOLDER_LABEL = EntryKind.FOLDER.label

# Label of the synthetic tree root holding one child per drive
ROOT_LABEL = "All drives"

# Label of the placeholder child of an unexpanded node
PLACEHOLDER_LABEL = "Loading..."
