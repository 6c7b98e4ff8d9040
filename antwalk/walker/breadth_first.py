#!/usr/bin/env python3
"""Breadth-first directory walker with include/exclude patterns.

The tree is processed one level at a time:
1. every directory of the current level is listed; admitted files are
   reported to the visitor as they are found, admitted directories are kept
2. every kept directory is reported with `visit_dir`
3. the kept directories become the next level

So all files of a level are reported before its directories, and a level is
finished before anything below it is read. A directory that is not admitted
is pruned: nothing below it is listed, matched or reported.

Example:
    >>> visitor = CollectingVisitor()
    >>> walker = BreadthFirstDirectoryWalker(True, visitor)
    >>> walker.set_includes(["src/**"])
    >>> walker.set_excludes(["**/test/**"])
    >>> walker.start("project")
"""

import os
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Tuple, Union

from antwalk.core.constants import Pattern
from antwalk.core.logging import Logger, get_logger
from antwalk.core.validators import validate_patterns
from antwalk.rules.path import RelativePath
from antwalk.rules.patterns import PatternMatcher, PatternMatcherFactory
from antwalk.walker.base import DirectoryWalker, FileVisitor, WalkStats

# (directory, its relative path, real paths of it and its ancestors)
_PendingDir = Tuple[Path, RelativePath, FrozenSet[str]]


class BreadthFirstDirectoryWalker(DirectoryWalker):
    """Walks a directory tree breadth first, reporting admitted entries.

    A path is admitted when it satisfies at least one include (or there are
    no includes) and no exclude. Children of a directory are listed in name
    order, so the output does not depend on the filesystem's listing order.
    """

    def __init__(
        self,
        case_sensitive: bool,
        visitor: FileVisitor,
        follow_symlinks: bool = True,
        logger: Optional[Logger] = None,
    ):
        """Initialize walker.

        Args:
            case_sensitive: Whether patterns compare segments case-sensitively
            visitor: Receiver of visit_file/visit_dir notifications
            follow_symlinks: Treat symlinks to directories as directories
            logger: Logger to use (default: shared antwalk logger)
        """
        self._case_sensitive = bool(case_sensitive)
        self._visitor = visitor
        self._follow_symlinks = follow_symlinks
        self._logger = logger or get_logger("antwalk")
        self._includes: Tuple[PatternMatcher, ...] = ()
        self._excludes: Tuple[PatternMatcher, ...] = ()
        self.last_stats: Optional[WalkStats] = None

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    @property
    def follow_symlinks(self) -> bool:
        return self._follow_symlinks

    @property
    def includes(self) -> Tuple[PatternMatcher, ...]:
        return self._includes

    @property
    def excludes(self) -> Tuple[PatternMatcher, ...]:
        return self._excludes

    def _compile(self, for_include: bool, patterns: Iterable[Pattern]) -> Tuple[PatternMatcher, ...]:
        checked = validate_patterns(patterns)
        return tuple(PatternMatcherFactory.compile_all(for_include, self._case_sensitive, checked))

    def set_includes(self, patterns: Iterable[Pattern]) -> None:
        self._includes = self._compile(True, patterns)

    def set_excludes(self, patterns: Iterable[Pattern]) -> None:
        self._excludes = self._compile(False, patterns)

    def is_allowed(self, path: RelativePath) -> bool:
        """Apply the include/exclude policy to one path.

        Args:
            path: Candidate relative path

        Returns:
            True if at least one include matches (or none are set) and no
            exclude matches
        """
        if self._includes and not any(m.is_satisfied_by(path) for m in self._includes):
            return False
        if any(m.is_satisfied_by(path) for m in self._excludes):
            return False
        return True

    def start(self, root: Union[str, Path]) -> None:
        """Walk `root`, which may be a file or a directory.

        For a directory only its contents are reported, not the directory
        itself. A missing or unresolvable root is logged and ignored.

        Args:
            root: File or directory to process

        Raises:
            Exception: Whatever the visitor raises, unchanged
        """
        stats = WalkStats()
        self.last_stats = stats

        try:
            canonical = Path(root).resolve(strict=True)
        except (OSError, RuntimeError, ValueError) as e:
            self._logger.info(f"File or directory '{root}' not found", reason=str(e))
            return

        with self._logger.add_context(root=str(canonical)):
            if canonical.is_file():
                self._process_single_file(canonical, stats)
            elif canonical.is_dir():
                self._walk(canonical, stats)
            else:
                self._logger.info(f"'{root}' is neither a regular file nor a directory")
                return

            self._logger.debug(
                "Walk complete",
                files=stats.files_visited,
                dirs=stats.dirs_visited,
                rejected=stats.rejected,
                pruned=stats.pruned,
                errors=stats.errors,
            )

    def _process_single_file(self, file: Path, stats: WalkStats) -> None:
        path = RelativePath((file.name,), True)
        if self.is_allowed(path):
            self._visitor.visit_file(file, path)
            stats.files_visited += 1
        else:
            stats.rejected += 1

    def _walk(self, root: Path, stats: WalkStats) -> None:
        level: List[_PendingDir] = [(root, RelativePath.root(), self._real_paths(root, frozenset()))]

        while level:
            admitted_dirs: List[_PendingDir] = []

            for directory, dir_path, ancestors in level:
                for child, is_dir in self._list_children(directory, stats):
                    child_path = dir_path.child(not is_dir, child.name)
                    if not self.is_allowed(child_path):
                        if is_dir:
                            stats.pruned += 1
                            self._logger.debug("Pruned directory", path=child_path.path_string)
                        else:
                            stats.rejected += 1
                        continue

                    if is_dir:
                        admitted_dirs.append((child, child_path, ancestors))
                    else:
                        self._visitor.visit_file(child, child_path)
                        stats.files_visited += 1

            level = []
            for directory, dir_path, ancestors in admitted_dirs:
                self._visitor.visit_dir(directory, dir_path)
                stats.dirs_visited += 1

                real_paths = self._real_paths(directory, ancestors)
                if real_paths is None:
                    stats.errors += 1
                    self._logger.warning(
                        "Symlink cycle detected, not descending", path=dir_path.path_string
                    )
                    continue
                level.append((directory, dir_path, real_paths))

    def _real_paths(self, directory: Path, ancestors: FrozenSet[str]) -> Optional[FrozenSet[str]]:
        """Add `directory`'s real path to its ancestors'; None on a cycle.

        Only needed when symlinks are followed; otherwise no cycle can form.
        """
        if not self._follow_symlinks:
            return ancestors
        real = os.path.realpath(directory)
        if real in ancestors:
            return None
        return ancestors | {real}

    def _list_children(self, directory: Path, stats: WalkStats) -> List[Tuple[Path, bool]]:
        """List `(child, is_dir)` pairs sorted by name.

        An unreadable directory is logged and yields no children; the walk
        carries on with its siblings.
        """
        try:
            with os.scandir(directory) as entries:
                children = [(Path(entry.path), self._is_dir(entry)) for entry in entries]
        except OSError as e:
            stats.errors += 1
            self._logger.warning(
                "Cannot read directory, skipping", directory=str(directory), error=str(e)
            )
            return []

        children.sort(key=lambda child: child[0].name)
        return children

    def _is_dir(self, entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir(follow_symlinks=self._follow_symlinks)
        except OSError:
            return False
