#!/usr/bin/env python3
"""Ant-style pattern matching for relative paths.

Patterns are split on `/` into segments, each compiled to a step:
- `**` matches zero or more whole segments (the only multi-segment construct)
- `*` matches zero or more characters inside one segment
- `?` matches exactly one character inside one segment
- anything else must match the segment literally

A pattern ending in `/` behaves as if followed by `**`. Matching is done by an
explicit two-pointer procedure with backtracking, at character level inside a
segment and at segment level across `**`; no regular expressions are built.

Example:
    >>> matcher = PatternMatcherFactory.compile(True, True, "src/**/*.java")
    >>> matcher.is_satisfied_by(RelativePath.from_string("src/a/B.java", True))
    True
"""

import os
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import List, Sequence, Tuple

from antwalk.core.constants import (
    ANY_SEGMENTS_WILDCARD,
    PATH_SEPARATOR,
    SEGMENT_WILDCARD,
    SINGLE_CHAR_WILDCARD,
    Pattern,
)
from antwalk.core.validators import InvalidPatternError, validate_pattern
from antwalk.rules.path import RelativePath

_WILDCARD_CHARS = frozenset(SEGMENT_WILDCARD + SINGLE_CHAR_WILDCARD)


def match_segment(pattern: str, text: str) -> bool:
    """Match one segment against a `*`/`?` wildcard pattern.

    `*` first matches nothing; on a later mismatch the most recent `*` is
    made to swallow one more character and matching resumes after it.
    """
    p = t = 0
    star_p = -1
    star_t = 0
    while t < len(text):
        if p < len(pattern) and pattern[p] == SEGMENT_WILDCARD:
            star_p = p
            star_t = t
            p += 1
        elif p < len(pattern) and (pattern[p] == SINGLE_CHAR_WILDCARD or pattern[p] == text[t]):
            p += 1
            t += 1
        elif star_p != -1:
            star_t += 1
            t = star_t
            p = star_p + 1
        else:
            return False

    while p < len(pattern) and pattern[p] == SEGMENT_WILDCARD:
        p += 1
    return p == len(pattern)


class PatternStep(ABC):
    """Matcher for a single pattern segment."""

    is_any_segments = False

    def __init__(self, value: str):
        self.value = value

    @abstractmethod
    def matches(self, segment: str) -> bool:
        """Check one path segment against this step."""

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __hash__(self):
        return hash((type(self), self.value))

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class FixedStep(PatternStep):
    """Segment without wildcards."""

    def matches(self, segment: str) -> bool:
        return segment == self.value


class WildcardStep(PatternStep):
    """Segment containing `*` or `?`."""

    def matches(self, segment: str) -> bool:
        return match_segment(self.value, segment)


class AnySegmentsStep(PatternStep):
    """The `**` segment."""

    is_any_segments = True

    def __init__(self):
        super().__init__(ANY_SEGMENTS_WILDCARD)

    def matches(self, segment: str) -> bool:
        return True


def match_steps(steps: Sequence[PatternStep], segments: Sequence[str], allow_prefix: bool) -> bool:
    """Match path segments against pattern steps.

    Every `**` first matches zero segments; when the rest fails, the most
    recent `**` takes one more segment and the steps after it are retried.
    Each non-`**` step consumes exactly one segment, so backtracking to the
    most recent `**` alone covers every possible expansion.

    Args:
        steps: Compiled pattern steps
        segments: Candidate path segments
        allow_prefix: Accept when the path runs out before the pattern does

    Returns:
        True if the segments match (the whole pattern, or a prefix of it)
    """
    s = i = 0
    back_s = -1
    back_i = 0
    while i < len(segments):
        if s < len(steps) and steps[s].is_any_segments:
            back_s = s
            back_i = i
            s += 1
        elif s < len(steps) and steps[s].matches(segments[i]):
            s += 1
            i += 1
        elif back_s != -1:
            back_i += 1
            i = back_i
            s = back_s + 1
        else:
            return False

    if allow_prefix:
        return True
    return all(step.is_any_segments for step in steps[s:])


class PatternMatcher(ABC):
    """Compiled predicate deciding whether a RelativePath satisfies one pattern.

    Only `PatternMatcherFactory` creates matchers. Include matchers also
    accept a directory that lies on the way to a possible match (the
    directory's segments match a prefix of the pattern), so the walker
    does not prune directories it needs to descend into.
    """

    def __init__(
        self,
        pattern: Pattern,
        steps: Tuple[PatternStep, ...],
        for_include: bool,
        case_sensitive: bool,
    ):
        self._pattern = pattern
        self._steps = steps
        self._for_include = for_include
        self._case_sensitive = case_sensitive

    @property
    def pattern(self) -> Pattern:
        """The pattern string as given to the factory."""
        return self._pattern

    @property
    def steps(self) -> Tuple[PatternStep, ...]:
        return self._steps

    @property
    def for_include(self) -> bool:
        return self._for_include

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def is_satisfied_by(self, path: RelativePath) -> bool:
        """Check whether `path` satisfies this pattern.

        Args:
            path: Candidate relative path

        Returns:
            True if the path matches
        """
        segments = path.segments
        if not self._case_sensitive:
            segments = tuple(segment.lower() for segment in segments)

        if self._for_include and not path.ends_with_file and self._matches_prefix(segments):
            return True
        return self._matches(segments)

    @abstractmethod
    def _matches(self, segments: Tuple[str, ...]) -> bool:
        """Full match of the segments against the whole pattern."""

    @abstractmethod
    def _matches_prefix(self, segments: Tuple[str, ...]) -> bool:
        """Match of the segments against some prefix of the pattern."""

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return (self._steps, self._for_include, self._case_sensitive) == (
            other._steps,
            other._for_include,
            other._case_sensitive,
        )

    def __hash__(self):
        return hash((type(self), self._steps, self._for_include, self._case_sensitive))

    def __repr__(self):
        kind = "include" if self._for_include else "exclude"
        case = "" if self._case_sensitive else ", ignore_case"
        return f"{type(self).__name__}({self._pattern!r}, {kind}{case})"


class AnythingMatcher(PatternMatcher):
    """Pattern made only of `**`: every path matches, the root included."""

    def _matches(self, segments):
        return True

    def _matches_prefix(self, segments):
        return True


class LiteralPatternMatcher(PatternMatcher):
    """Pattern without wildcards: plain segment equality."""

    def __init__(self, pattern, steps, for_include, case_sensitive):
        super().__init__(pattern, steps, for_include, case_sensitive)
        self._names = tuple(step.value for step in steps)

    def _matches(self, segments):
        return segments == self._names

    def _matches_prefix(self, segments):
        return len(segments) <= len(self._names) and segments == self._names[: len(segments)]


class SegmentPatternMatcher(PatternMatcher):
    """Pattern with `*`/`?` but no `**`: one step per segment, fixed length."""

    def _matches(self, segments):
        if len(segments) != len(self._steps):
            return False
        return all(step.matches(segment) for step, segment in zip(self._steps, segments))

    def _matches_prefix(self, segments):
        if len(segments) > len(self._steps):
            return False
        return all(step.matches(segment) for step, segment in zip(self._steps, segments))


class DoubleStarPatternMatcher(PatternMatcher):
    """Pattern containing `**`: segment-level backtracking."""

    def _matches(self, segments):
        return match_steps(self._steps, segments, allow_prefix=False)

    def _matches_prefix(self, segments):
        return match_steps(self._steps, segments, allow_prefix=True)


def normalize_pattern(pattern: Pattern) -> List[str]:
    """Split a pattern into its normalized segments.

    Backslashes and the platform separator become `/`, a trailing separator
    becomes a trailing `**`, and empty, `.` and repeated `**` segments are
    dropped.

    Args:
        pattern: Raw pattern string

    Returns:
        Pattern segments

    Raises:
        InvalidPatternError: If the pattern has no segments or a segment
            mixes `**` with other characters
    """
    normalized = pattern.replace("\\", PATH_SEPARATOR)
    if os.sep != PATH_SEPARATOR:
        normalized = normalized.replace(os.sep, PATH_SEPARATOR)
    if normalized.endswith(PATH_SEPARATOR):
        normalized += ANY_SEGMENTS_WILDCARD

    segments: List[str] = []
    for segment in normalized.split(PATH_SEPARATOR):
        if not segment or segment == ".":
            continue
        if ANY_SEGMENTS_WILDCARD in segment and segment != ANY_SEGMENTS_WILDCARD:
            raise InvalidPatternError(
                f"Invalid pattern {pattern!r}: '**' must be a whole segment, got {segment!r}",
                pattern,
            )
        if segment == ANY_SEGMENTS_WILDCARD and segments and segments[-1] == segment:
            continue
        segments.append(segment)

    if not segments:
        raise InvalidPatternError(f"Invalid pattern {pattern!r}: no path segments", pattern)
    return segments


def _compile_step(segment: str) -> PatternStep:
    if segment == ANY_SEGMENTS_WILDCARD:
        return AnySegmentsStep()
    if any(c in _WILDCARD_CHARS for c in segment):
        return WildcardStep(segment)
    return FixedStep(segment)


@lru_cache(maxsize=512)
def _compile(for_include: bool, case_sensitive: bool, pattern: Pattern) -> PatternMatcher:
    segments = normalize_pattern(pattern)
    if not case_sensitive:
        segments = [segment.lower() for segment in segments]
    steps = tuple(_compile_step(segment) for segment in segments)

    if all(step.is_any_segments for step in steps):
        matcher_class = AnythingMatcher
    elif any(step.is_any_segments for step in steps):
        matcher_class = DoubleStarPatternMatcher
    elif any(isinstance(step, WildcardStep) for step in steps):
        matcher_class = SegmentPatternMatcher
    else:
        matcher_class = LiteralPatternMatcher
    return matcher_class(pattern, steps, for_include, case_sensitive)


class PatternMatcherFactory:
    """Compiles pattern strings into PatternMatcher variants."""

    @staticmethod
    def compile(for_include: bool, case_sensitive: bool, pattern: Pattern) -> PatternMatcher:
        """Compile one pattern.

        The variant is chosen from the pattern's shape: only `**` segments,
        some `**` segments, single-segment wildcards only, or plain literals.
        Matchers are immutable, so identical requests share one instance.

        Args:
            for_include: Whether the matcher is used as an include pattern
            case_sensitive: Whether segment comparison is case-sensitive
            pattern: Ant-style pattern string

        Returns:
            Compiled matcher

        Raises:
            InvalidPatternError: If the pattern is malformed
        """
        validate_pattern(pattern)
        return _compile(bool(for_include), bool(case_sensitive), pattern)

    @staticmethod
    def compile_all(
        for_include: bool, case_sensitive: bool, patterns: Sequence[Pattern]
    ) -> List[PatternMatcher]:
        """Compile several patterns, keeping their order."""
        return [PatternMatcherFactory.compile(for_include, case_sensitive, p) for p in patterns]


def compile_pattern(for_include: bool, case_sensitive: bool, pattern: Pattern) -> PatternMatcher:
    """Module-level shortcut for `PatternMatcherFactory.compile`."""
    return PatternMatcherFactory.compile(for_include, case_sensitive, pattern)
