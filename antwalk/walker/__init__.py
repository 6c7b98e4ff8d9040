"""antwalk directory walking.

- DirectoryWalker / BreadthFirstDirectoryWalker: pattern-filtered traversal
- FileVisitor: the notification interface callers implement
- CollectingVisitor / TemplateVisitor: stock visitors
- select: walk a root and return the selected relative paths
"""

from .base import DirectoryWalker, FileVisitor, WalkStats
from .breadth_first import BreadthFirstDirectoryWalker
from .selection import select
from .visitors import CollectingVisitor, EntryKind, TemplateVisitor, VisitEvent

__all__ = [
    "DirectoryWalker",
    "FileVisitor",
    "WalkStats",
    "BreadthFirstDirectoryWalker",
    "CollectingVisitor",
    "EntryKind",
    "TemplateVisitor",
    "VisitEvent",
    "select",
]
