#!/usr/bin/env python3
"""Walker and visitor interfaces.

A `DirectoryWalker` owns include/exclude matchers and reports every admitted
file and directory below a root to a `FileVisitor`. Visitors are supplied by
callers (copy operations, source-set scanners, the CLI printer) and only need
the two notification methods.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol, Union, runtime_checkable

from antwalk.core.constants import Pattern
from antwalk.rules.path import RelativePath


@runtime_checkable
class FileVisitor(Protocol):
    """Receives walk notifications. Return values are ignored."""

    def visit_file(self, file: Path, path: RelativePath) -> None:
        ...

    def visit_dir(self, directory: Path, path: RelativePath) -> None:
        ...


@dataclass
class WalkStats:
    """Counters for one `start()` call."""

    files_visited: int = 0
    dirs_visited: int = 0
    rejected: int = 0  # files not admitted
    pruned: int = 0  # directories not admitted
    errors: int = 0


class DirectoryWalker(ABC):
    """Abstract walker configured with include and exclude patterns."""

    @abstractmethod
    def set_includes(self, patterns: Iterable[Pattern]) -> None:
        """Replace the include patterns.

        Args:
            patterns: Pattern strings; an empty collection accepts everything

        Raises:
            ValidationError: If any pattern is invalid (nothing is replaced)
        """

    @abstractmethod
    def set_excludes(self, patterns: Iterable[Pattern]) -> None:
        """Replace the exclude patterns.

        Args:
            patterns: Pattern strings

        Raises:
            ValidationError: If any pattern is invalid (nothing is replaced)
        """

    @abstractmethod
    def start(self, root: Union[str, Path]) -> None:
        """Walk `root` and notify the visitor of every admitted entry."""
