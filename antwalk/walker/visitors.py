#!/usr/bin/env python3
"""Ready-made FileVisitor implementations.

- CollectingVisitor: keeps every notification in order, for callers that
  want a list of selected paths
- TemplateVisitor: renders each notification through a Jinja2 template and
  writes one line per entry to a text stream

Example:
    >>> visitor = TemplateVisitor("{{ kind }} {{ relative_path }}", include_dirs=True)
    >>> walker = BreadthFirstDirectoryWalker(True, visitor)
    >>> walker.start("src")
"""

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, TextIO

import jinja2
from jinja2 import meta

from antwalk.core.constants import DEFAULT_OUTPUT_FORMAT, ErrorCode
from antwalk.core.validators import ValidationError
from antwalk.rules.path import RelativePath

TEMPLATE_VARIABLES = frozenset({"path", "relative_path", "name", "kind", "depth"})


class EntryKind(Enum):
    """Kind of walk notification."""

    FILE = "file"
    DIR = "dir"


@dataclass(frozen=True)
class VisitEvent:
    """One recorded notification."""

    kind: EntryKind
    location: Path
    path: RelativePath


class CollectingVisitor:
    """Records notifications in the order they arrive."""

    def __init__(self):
        self.events: List[VisitEvent] = []

    def visit_file(self, file: Path, path: RelativePath) -> None:
        self.events.append(VisitEvent(EntryKind.FILE, file, path))

    def visit_dir(self, directory: Path, path: RelativePath) -> None:
        self.events.append(VisitEvent(EntryKind.DIR, directory, path))

    @property
    def files(self) -> List[RelativePath]:
        return [e.path for e in self.events if e.kind is EntryKind.FILE]

    @property
    def dirs(self) -> List[RelativePath]:
        return [e.path for e in self.events if e.kind is EntryKind.DIR]

    @property
    def paths(self) -> List[RelativePath]:
        """Every reported path, files and directories, in visit order."""
        return [e.path for e in self.events]

    def clear(self) -> None:
        self.events.clear()


class TemplateVisitor:
    """Writes one rendered Jinja2 line per notification.

    Template variables:
    - path: absolute location of the entry
    - relative_path: `/`-separated path below the walk root
    - name: last path segment
    - kind: "file" or "dir"
    - depth: number of segments in the relative path
    """

    def __init__(
        self,
        template: str = DEFAULT_OUTPUT_FORMAT,
        stream: Optional[TextIO] = None,
        include_dirs: bool = False,
    ):
        """Initialize template visitor.

        Args:
            template: Jinja2 template for a single output line
            stream: Output stream (default: sys.stdout at write time)
            include_dirs: Also write a line for directory notifications

        Raises:
            ValidationError: If the template cannot be parsed or uses an
                unknown variable
        """
        self._env = jinja2.Environment(undefined=jinja2.StrictUndefined, autoescape=False)
        try:
            ast = self._env.parse(template)
        except jinja2.TemplateSyntaxError as e:
            raise ValidationError(f"Invalid output format {template!r}: {e}")

        unknown = meta.find_undeclared_variables(ast) - TEMPLATE_VARIABLES - set(self._env.globals)
        if unknown:
            raise ValidationError(
                f"Output format error: unknown variable(s) {', '.join(sorted(unknown))}; "
                f"available: {', '.join(sorted(TEMPLATE_VARIABLES))}"
            )
        self._template = self._env.from_string(template)
        self._stream = stream
        self._include_dirs = include_dirs
        self.lines_written = 0

    def visit_file(self, file: Path, path: RelativePath) -> None:
        self._emit(EntryKind.FILE, file, path)

    def visit_dir(self, directory: Path, path: RelativePath) -> None:
        if self._include_dirs:
            self._emit(EntryKind.DIR, directory, path)

    def render(self, kind: EntryKind, location: Path, path: RelativePath) -> str:
        """Render the line for one entry.

        Raises:
            ValidationError: If the template uses an unknown variable
        """
        try:
            return self._template.render(
                path=str(location),
                relative_path=path.path_string,
                name=path.name,
                kind=kind.value,
                depth=path.depth,
            )
        except jinja2.UndefinedError as e:
            raise ValidationError(f"Output format error: {e}", ErrorCode.INVALID_INPUT)

    def _emit(self, kind: EntryKind, location: Path, path: RelativePath) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(self.render(kind, location, path) + "\n")
        self.lines_written += 1
