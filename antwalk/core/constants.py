"""
antwalk Core: Constants and Type Definitions

This module provides system-wide constants, error codes, and type aliases
shared by the pattern engine, the walker and the command-line front end.
"""
from enum import IntEnum
from typing import TypeAlias

# Version information
ANTWALK_VERSION = "1.0.0"

# Separator used inside patterns and relative paths
PATH_SEPARATOR = "/"

# Pattern wildcards
SINGLE_CHAR_WILDCARD = "?"
SEGMENT_WILDCARD = "*"
ANY_SEGMENTS_WILDCARD = "**"


class ErrorCode(IntEnum):
    """Standardized error codes for antwalk operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad pattern, invalid configuration
    NOT_FOUND = 2  # File or resource doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    INTERNAL_ERROR = 6  # Bug in antwalk


# Type aliases for clarity
Pattern: TypeAlias = str


class Limits:
    """Input limits."""

    MAX_PATH_LENGTH = 4096
    MAX_PATTERN_LENGTH = 4096
    MAX_TEMPLATE_LENGTH = 1024


class ConfigKey:
    """Configuration key constants."""

    # Top-level keys
    ROOT = "root"
    SELECTION = "selection"
    OUTPUT = "output"
    LOGGING = "logging"

    # Selection configuration
    INCLUDES = "includes"
    EXCLUDES = "excludes"
    CASE_SENSITIVE = "case_sensitive"
    FOLLOW_SYMLINKS = "follow_symlinks"
    DEFAULT_EXCLUDES = "default_excludes"

    # Output configuration
    FORMAT = "format"
    INCLUDE_DIRS = "include_dirs"

    # Logging configuration
    LEVEL = "level"
    FILE = "file"


DEFAULT_OUTPUT_FORMAT = "{{ relative_path }}"

# Version control and editor metadata, excluded when `default_excludes` is on.
DEFAULT_EXCLUDES: list = [
    "**/*~",
    "**/#*#",
    "**/.#*",
    "**/%*%",
    "**/._*",
    "**/CVS/",
    "**/.cvsignore",
    "**/SCCS/",
    "**/vssver.scc",
    "**/.svn/",
    "**/.git/",
    "**/.gitattributes",
    "**/.gitignore",
    "**/.gitmodules",
    "**/.hg/",
    "**/.hgignore",
    "**/.hgsub",
    "**/.hgsubstate",
    "**/.hgtags",
    "**/.bzr/",
    "**/.bzrignore",
    "**/.DS_Store",
]

# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.ROOT: None,
    ConfigKey.SELECTION: {
        ConfigKey.INCLUDES: [],
        ConfigKey.EXCLUDES: [],
        ConfigKey.CASE_SENSITIVE: True,
        ConfigKey.FOLLOW_SYMLINKS: True,
        ConfigKey.DEFAULT_EXCLUDES: False,
    },
    ConfigKey.OUTPUT: {
        ConfigKey.FORMAT: DEFAULT_OUTPUT_FORMAT,
        ConfigKey.INCLUDE_DIRS: False,
    },
    ConfigKey.LOGGING: {
        ConfigKey.LEVEL: "WARNING",
        ConfigKey.FILE: None,
    },
}
