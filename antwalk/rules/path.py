#!/usr/bin/env python3
"""Relative paths used as the unit of matching and reporting.

A `RelativePath` is a logical coordinate below a traversal root: the ordered
segment names from the root down to the entry, plus a flag saying whether the
last segment names a file. It never touches the filesystem.

Example:
    >>> src = RelativePath.root().child(False, "src")
    >>> src.child(True, "Foo.java").path_string
    'src/Foo.java'
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from antwalk.core.constants import PATH_SEPARATOR


def _check_segment(name: str) -> None:
    if not isinstance(name, str):
        raise ValueError(f"Path segment must be string, got {type(name).__name__}")
    if not name:
        raise ValueError("Path segment cannot be empty")
    if PATH_SEPARATOR in name:
        raise ValueError(f"Path segment cannot contain '{PATH_SEPARATOR}': {name!r}")


@dataclass(frozen=True, order=True)
class RelativePath:
    """Immutable path relative to a traversal root.

    Equality, hashing and ordering compare `segments` first, then
    `ends_with_file`. An empty `segments` tuple is the root itself.
    """

    segments: Tuple[str, ...] = ()
    ends_with_file: bool = False

    def __post_init__(self):
        if not isinstance(self.segments, tuple):
            object.__setattr__(self, "segments", tuple(self.segments))
        for name in self.segments:
            _check_segment(name)

    @classmethod
    def root(cls, is_file: bool = False) -> "RelativePath":
        """Return the zero-segment path."""
        return cls((), is_file)

    @classmethod
    def from_string(cls, path: str, is_file: bool) -> "RelativePath":
        """Parse a `/` (or `\\`) separated path, ignoring empty parts.

        Args:
            path: Relative path string such as "src/main/Foo.java"
            is_file: Whether the last segment names a file

        Returns:
            Parsed relative path
        """
        normalized = path.replace("\\", PATH_SEPARATOR)
        return cls(tuple(p for p in normalized.split(PATH_SEPARATOR) if p), is_file)

    def child(self, is_file: bool, name: str) -> "RelativePath":
        """Return a new path with `name` appended; this path is unchanged."""
        _check_segment(name)
        return RelativePath(self.segments + (name,), is_file)

    def prepend(self, name: str) -> "RelativePath":
        """Return a new path with `name` inserted in front of the segments."""
        _check_segment(name)
        return RelativePath((name,) + self.segments, self.ends_with_file)

    def append(self, other: "RelativePath") -> "RelativePath":
        """Return this path followed by `other`, taking its file flag."""
        return RelativePath(self.segments + other.segments, other.ends_with_file)

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def name(self) -> str:
        """Last segment, or an empty string for the root."""
        return self.segments[-1] if self.segments else ""

    @property
    def parent(self) -> Optional["RelativePath"]:
        """Enclosing directory path, or None for the root."""
        if not self.segments:
            return None
        return RelativePath(self.segments[:-1], False)

    @property
    def path_string(self) -> str:
        return PATH_SEPARATOR.join(self.segments)

    def get_file(self, base: Union[str, Path]) -> Path:
        """Join this path onto `base`."""
        return Path(base).joinpath(*self.segments)

    def __str__(self) -> str:
        return self.path_string
