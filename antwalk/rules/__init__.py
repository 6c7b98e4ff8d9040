"""antwalk Rules System.

Relative paths and Ant-style pattern matching:
- RelativePath: segments below a traversal root plus a file/directory flag
- PatternMatcher variants: compiled include/exclude patterns
- PatternMatcherFactory: turns pattern strings into matchers

Patterns use `?` (one character), `*` (characters within a segment) and
`**` (any number of whole segments).
"""

from .path import RelativePath
from .patterns import (
    AnySegmentsStep,
    AnythingMatcher,
    DoubleStarPatternMatcher,
    FixedStep,
    LiteralPatternMatcher,
    PatternMatcher,
    PatternMatcherFactory,
    PatternStep,
    SegmentPatternMatcher,
    WildcardStep,
    compile_pattern,
    match_segment,
    match_steps,
    normalize_pattern,
)

__all__ = [
    "RelativePath",
    # Pattern steps
    "PatternStep",
    "FixedStep",
    "WildcardStep",
    "AnySegmentsStep",
    # Matchers
    "PatternMatcher",
    "AnythingMatcher",
    "LiteralPatternMatcher",
    "SegmentPatternMatcher",
    "DoubleStarPatternMatcher",
    "PatternMatcherFactory",
    "compile_pattern",
    "match_segment",
    "match_steps",
    "normalize_pattern",
]
