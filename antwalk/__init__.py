"""antwalk - Ant-style file selection.

Walks a directory tree breadth first and reports every file and directory
admitted by a set of include/exclude glob patterns.

Example:
    >>> from antwalk import select
    >>> select("project", includes=["src/**"], excludes=["**/test/**"])
"""

from antwalk.core.constants import ANTWALK_VERSION
from antwalk.core.validators import InvalidPatternError, ValidationError
from antwalk.rules import PatternMatcher, PatternMatcherFactory, RelativePath, compile_pattern
from antwalk.walker import (
    BreadthFirstDirectoryWalker,
    CollectingVisitor,
    DirectoryWalker,
    FileVisitor,
    TemplateVisitor,
    WalkStats,
    select,
)

__version__ = ANTWALK_VERSION

__all__ = [
    "__version__",
    "InvalidPatternError",
    "ValidationError",
    "RelativePath",
    "PatternMatcher",
    "PatternMatcherFactory",
    "compile_pattern",
    "DirectoryWalker",
    "FileVisitor",
    "BreadthFirstDirectoryWalker",
    "CollectingVisitor",
    "TemplateVisitor",
    "WalkStats",
    "select",
]
