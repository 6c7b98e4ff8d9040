#!/usr/bin/env python3
"""Command-line interface for antwalk.

This module provides the `antwalk` command:
- Argument parsing and validation
- Configuration layering (defaults, YAML file, environment, arguments)
- Logging setup
- Exit status mapping for errors

Example:
    >>> from antwalk.cli import parse_arguments
    >>> args = parse_arguments(["project", "-i", "src/**", "-e", "**/test/**"])
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

from antwalk.core.config import ConfigError, ConfigManager, ConfigSource
from antwalk.core.constants import ANTWALK_VERSION, ConfigKey
from antwalk.core.logging import Logger
from antwalk.core.validators import ValidationError

DESCRIPTION = "antwalk - list files selected by Ant-style include/exclude patterns"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
        CLIError: If argument values are inconsistent
    """
    parser = argparse.ArgumentParser(
        prog="antwalk",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Pattern syntax:
  ?     one character within a path segment
  *     any characters within a path segment
  **    any number of whole path segments
  dir/  same as dir/**

Examples:
  # Java sources outside test directories
  antwalk project -i 'src/**/*.java' -e '**/test/**'

  # Directories too, with a custom line format
  antwalk project --dirs --format '{{ kind }} {{ relative_path }}'

  # Patterns from a configuration file
  antwalk --config antwalk.yaml
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {ANTWALK_VERSION}",
    )

    parser.add_argument(
        "root",
        nargs="?",
        metavar="ROOT",
        help="File or directory to walk (may also come from the config file)",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    # Selection options
    selection_group = parser.add_argument_group("selection options")

    selection_group.add_argument(
        "-i",
        "--include",
        metavar="PATTERN",
        action="append",
        dest="includes",
        help="Include pattern (repeatable; default: everything)",
    )

    selection_group.add_argument(
        "-e",
        "--exclude",
        metavar="PATTERN",
        action="append",
        dest="excludes",
        help="Exclude pattern (repeatable)",
    )

    selection_group.add_argument(
        "--ignore-case",
        action="store_true",
        help="Match patterns case-insensitively",
    )

    selection_group.add_argument(
        "--no-follow-symlinks",
        action="store_true",
        help="Report symlinks to directories as files instead of descending",
    )

    selection_group.add_argument(
        "--default-excludes",
        action="store_true",
        help="Also exclude version control and editor metadata (.git/, .svn/, ...)",
    )

    # Output options
    output_group = parser.add_argument_group("output options")

    output_group.add_argument(
        "--dirs",
        action="store_true",
        help="Also print selected directories",
    )

    output_group.add_argument(
        "--format",
        metavar="TEMPLATE",
        type=str,
        help="Jinja2 line template; variables: path, relative_path, name, kind, depth",
    )

    # Logging options
    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--verbose",
        action="store_true",
        help="Enable informational logging",
    )

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write log records to this file",
    )

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments namespace

    Raises:
        CLIError: If validation fails
    """
    if not args.root and not args.config:
        raise CLIError("Either ROOT or --config must be specified\nUse --help for usage information")

    if args.format is not None and not args.format:
        raise CLIError("--format cannot be empty")

    for option, patterns in (("--include", args.includes), ("--exclude", args.excludes)):
        for pattern in patterns or []:
            if not pattern:
                raise CLIError(f"{option} pattern cannot be empty")


def build_config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Build the CLI configuration layer from parsed arguments.

    Only options that were actually given appear, so unset flags do not
    override the configuration file or environment.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configuration dictionary for the CLI_ARGS layer
    """
    config: Dict[str, Any] = {}

    if args.root:
        config[ConfigKey.ROOT] = args.root

    selection: Dict[str, Any] = {}
    if args.includes:
        selection[ConfigKey.INCLUDES] = list(args.includes)
    if args.excludes:
        selection[ConfigKey.EXCLUDES] = list(args.excludes)
    if args.ignore_case:
        selection[ConfigKey.CASE_SENSITIVE] = False
    if args.no_follow_symlinks:
        selection[ConfigKey.FOLLOW_SYMLINKS] = False
    if args.default_excludes:
        selection[ConfigKey.DEFAULT_EXCLUDES] = True
    if selection:
        config[ConfigKey.SELECTION] = selection

    output: Dict[str, Any] = {}
    if args.format:
        output[ConfigKey.FORMAT] = args.format
    if args.dirs:
        output[ConfigKey.INCLUDE_DIRS] = True
    if output:
        config[ConfigKey.OUTPUT] = output

    logging_config: Dict[str, Any] = {}
    if args.debug:
        logging_config[ConfigKey.LEVEL] = "DEBUG"
    elif args.verbose:
        logging_config[ConfigKey.LEVEL] = "INFO"
    if args.log_file:
        logging_config[ConfigKey.FILE] = args.log_file
    if logging_config:
        config[ConfigKey.LOGGING] = logging_config

    return config


def build_config_manager(args: argparse.Namespace) -> ConfigManager:
    """
    Layer defaults, config file, environment and arguments.

    Args:
        args: Parsed arguments namespace

    Returns:
        Populated configuration manager

    Raises:
        ConfigError: If any layer is invalid
        CLIError: If no root is configured anywhere
    """
    config = ConfigManager(config_file=args.config)
    config.load_dict(build_config_from_args(args), ConfigSource.CLI_ARGS)

    if not config.get(ConfigKey.ROOT):
        raise CLIError("No root configured: pass ROOT or set 'root' in the config file")

    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Create the logger described by the configuration.

    Args:
        config: Configuration manager

    Returns:
        Configured logger instance
    """
    level = config.get(f"{ConfigKey.LOGGING}.{ConfigKey.LEVEL}", "WARNING")
    log_file = config.get(f"{ConfigKey.LOGGING}.{ConfigKey.FILE}")

    logger = Logger("antwalk", level=level)

    if log_file:
        logger.add_handler(logger.create_file_handler(log_file))
        logger.debug(f"Logging to file: {log_file}")

    return logger


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Parses arguments, builds the configuration and logger, then hands over
    to `antwalk.main.run_antwalk`.

    Returns:
        Process exit status
    """
    try:
        args = parse_arguments(argv)
        config = build_config_manager(args)
        logger = setup_logging(config)

        from antwalk.main import run_antwalk

        return run_antwalk(config, logger)

    except (CLIError, ConfigError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
