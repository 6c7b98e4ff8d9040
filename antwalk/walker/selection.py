"""One-call file selection on top of the breadth-first walker."""

from pathlib import Path
from typing import Iterable, List, Optional, Union

from antwalk.core.constants import Pattern
from antwalk.core.logging import Logger
from antwalk.rules.path import RelativePath
from antwalk.walker.breadth_first import BreadthFirstDirectoryWalker
from antwalk.walker.visitors import CollectingVisitor


def select(
    root: Union[str, Path],
    includes: Iterable[Pattern] = (),
    excludes: Iterable[Pattern] = (),
    case_sensitive: bool = True,
    follow_symlinks: bool = True,
    include_dirs: bool = False,
    logger: Optional[Logger] = None,
) -> List[RelativePath]:
    """Return the relative paths a walk of `root` reports, in visit order.

    Args:
        root: File or directory to walk
        includes: Include patterns (empty accepts everything)
        excludes: Exclude patterns
        case_sensitive: Whether patterns are case-sensitive
        follow_symlinks: Treat symlinks to directories as directories
        include_dirs: Also return admitted directories
        logger: Logger for the walker

    Returns:
        Selected relative paths; empty for a missing root

    Raises:
        ValidationError: If any pattern is invalid
    """
    visitor = CollectingVisitor()
    walker = BreadthFirstDirectoryWalker(case_sensitive, visitor, follow_symlinks, logger)
    walker.set_includes(includes)
    walker.set_excludes(excludes)
    walker.start(root)
    return visitor.paths if include_dirs else visitor.files
