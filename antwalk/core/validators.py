"""
antwalk Core: Input Validators.

This module provides input validation for patterns, traversal roots and
configuration sections. Validation failures raise `ValidationError` (or
`InvalidPatternError` for patterns) before any traversal starts.
"""
from typing import Any, Dict, Iterable, List, Optional

from antwalk.core.constants import ConfigKey, ErrorCode, Limits
from antwalk.core.logging import LogLevel


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class InvalidPatternError(ValidationError):
    """Raised when an include or exclude pattern cannot be compiled."""

    def __init__(self, message: str, pattern: Optional[str] = None):
        super().__init__(message, ErrorCode.INVALID_INPUT)
        self.pattern = pattern


def _has_control_characters(value: str) -> bool:
    return any(ord(c) < 32 or ord(c) == 127 for c in value)


def validate_pattern(pattern: str) -> bool:
    """Validate the lexical form of a glob pattern.

    Structural checks (segment shapes) are done when the pattern is compiled.

    Args:
        pattern: Pattern to validate

    Returns:
        True if valid

    Raises:
        InvalidPatternError: If pattern is invalid
    """
    if not isinstance(pattern, str):
        raise InvalidPatternError(f"Pattern must be string, got {type(pattern).__name__}")

    if not pattern or not pattern.strip():
        raise InvalidPatternError("Pattern cannot be empty", pattern)

    if len(pattern) > Limits.MAX_PATTERN_LENGTH:
        raise InvalidPatternError(
            f"Pattern exceeds maximum length ({Limits.MAX_PATTERN_LENGTH})", pattern
        )

    if "\0" in pattern:
        raise InvalidPatternError("Invalid pattern: contains null bytes", pattern)

    if _has_control_characters(pattern):
        raise InvalidPatternError("Invalid pattern: contains control characters", pattern)

    return True


def validate_patterns(patterns: Iterable[str]) -> List[str]:
    """Validate a collection of patterns.

    Args:
        patterns: Iterable of pattern strings (a bare string is rejected)

    Returns:
        The patterns as a list, in their original order

    Raises:
        ValidationError: If the collection or any pattern is invalid
    """
    if isinstance(patterns, (str, bytes)):
        raise ValidationError("Patterns must be a list of strings, not a single string")

    try:
        result = list(patterns)
    except TypeError:
        raise ValidationError(f"Patterns must be iterable, got {type(patterns).__name__}")

    for pattern in result:
        validate_pattern(pattern)
    return result


def validate_path(path: str) -> bool:
    """Validate a traversal root or output path.

    Args:
        path: Path to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If path is invalid
    """
    if not isinstance(path, str):
        raise ValidationError(f"Path must be string, got {type(path).__name__}")

    if not path:
        raise ValidationError("Path cannot be empty")

    if len(path) > Limits.MAX_PATH_LENGTH:
        raise ValidationError(f"Path exceeds maximum length ({Limits.MAX_PATH_LENGTH})")

    if "\0" in path:
        raise ValidationError("Path contains null bytes")

    return True


def validate_selection_config(selection: Dict[str, Any]) -> bool:
    """Validate the `selection` configuration section.

    Args:
        selection: Selection configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If selection config is invalid
    """
    if not isinstance(selection, dict):
        raise ValidationError("Selection configuration must be a dictionary")

    valid_fields = {
        ConfigKey.INCLUDES,
        ConfigKey.EXCLUDES,
        ConfigKey.CASE_SENSITIVE,
        ConfigKey.FOLLOW_SYMLINKS,
        ConfigKey.DEFAULT_EXCLUDES,
    }
    unknown_fields = set(selection.keys()) - valid_fields
    if unknown_fields:
        raise ValidationError(
            f"Unknown selection configuration fields: {', '.join(sorted(unknown_fields))}"
        )

    for key in (ConfigKey.INCLUDES, ConfigKey.EXCLUDES):
        if key in selection:
            patterns = selection[key]
            if not isinstance(patterns, list):
                raise ValidationError(f"Selection {key} must be a list")
            try:
                validate_patterns(patterns)
            except InvalidPatternError as e:
                raise InvalidPatternError(f"Invalid pattern in {key}: {e}", e.pattern)

    for key in (ConfigKey.CASE_SENSITIVE, ConfigKey.FOLLOW_SYMLINKS, ConfigKey.DEFAULT_EXCLUDES):
        if key in selection and not isinstance(selection[key], bool):
            raise ValidationError(f"Selection {key} must be boolean: {selection[key]}")

    return True


def validate_output_config(output: Dict[str, Any]) -> bool:
    """Validate the `output` configuration section.

    Args:
        output: Output configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If output config is invalid
    """
    if not isinstance(output, dict):
        raise ValidationError("Output configuration must be a dictionary")

    if ConfigKey.FORMAT in output:
        template = output[ConfigKey.FORMAT]
        if not isinstance(template, str) or not template:
            raise ValidationError(f"Output format must be a non-empty string: {template!r}")
        if len(template) > Limits.MAX_TEMPLATE_LENGTH:
            raise ValidationError(
                f"Output format exceeds maximum length ({Limits.MAX_TEMPLATE_LENGTH})"
            )

    if ConfigKey.INCLUDE_DIRS in output and not isinstance(output[ConfigKey.INCLUDE_DIRS], bool):
        raise ValidationError(
            f"Output include_dirs must be boolean: {output[ConfigKey.INCLUDE_DIRS]}"
        )

    return True


def validate_logging_config(logging_config: Dict[str, Any]) -> bool:
    """Validate the `logging` configuration section."""
    if not isinstance(logging_config, dict):
        raise ValidationError("Logging configuration must be a dictionary")

    level = logging_config.get(ConfigKey.LEVEL)
    if level is not None:
        if not isinstance(level, str) or level.upper() not in LogLevel.__members__:
            valid_levels = list(LogLevel.__members__)
            raise ValidationError(f"Invalid log level: {level}. Must be one of {valid_levels}")

    log_file = logging_config.get(ConfigKey.FILE)
    if log_file is not None:
        validate_path(log_file)

    return True


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate a complete antwalk configuration.

    Args:
        config: Configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    root = config.get(ConfigKey.ROOT)
    if root is not None:
        validate_path(root)

    if ConfigKey.SELECTION in config:
        validate_selection_config(config[ConfigKey.SELECTION])

    if ConfigKey.OUTPUT in config:
        validate_output_config(config[ConfigKey.OUTPUT])

    if ConfigKey.LOGGING in config:
        validate_logging_config(config[ConfigKey.LOGGING])

    return True
