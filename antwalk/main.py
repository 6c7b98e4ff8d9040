#!/usr/bin/env python3
"""Run a configured selection walk.

This module wires the configuration into the walker:
- builds the output visitor from the `output` section
- builds the walker and its patterns from the `selection` section
- walks the configured root and reports the result

Example:
    >>> from antwalk.main import run_antwalk
    >>> run_antwalk(config, logger)
"""

from typing import Optional, TextIO

from antwalk.core.config import ConfigManager
from antwalk.core.constants import DEFAULT_OUTPUT_FORMAT, ConfigKey
from antwalk.core.logging import Logger
from antwalk.walker.breadth_first import BreadthFirstDirectoryWalker
from antwalk.walker.visitors import TemplateVisitor


def create_walker(
    config: ConfigManager, visitor, logger: Optional[Logger] = None
) -> BreadthFirstDirectoryWalker:
    """
    Build a walker from the `selection` configuration section.

    Args:
        config: Configuration manager
        visitor: Visitor that receives notifications
        logger: Logger for the walker

    Returns:
        Walker with includes and excludes applied

    Raises:
        ValidationError: If a configured pattern is invalid
    """
    walker = BreadthFirstDirectoryWalker(
        case_sensitive=config.get(f"{ConfigKey.SELECTION}.{ConfigKey.CASE_SENSITIVE}", True),
        visitor=visitor,
        follow_symlinks=config.get(f"{ConfigKey.SELECTION}.{ConfigKey.FOLLOW_SYMLINKS}", True),
        logger=logger,
    )
    walker.set_includes(config.get_includes())
    walker.set_excludes(config.get_excludes())
    return walker


def run_antwalk(config: ConfigManager, logger: Logger, stream: Optional[TextIO] = None) -> int:
    """
    Walk the configured root and print each selected entry.

    Args:
        config: Configuration manager (must define `root`)
        logger: Logger instance
        stream: Output stream (default: stdout)

    Returns:
        Exit status (0; a missing root is not an error)
    """
    root = config.get(ConfigKey.ROOT)

    visitor = TemplateVisitor(
        template=config.get(f"{ConfigKey.OUTPUT}.{ConfigKey.FORMAT}", DEFAULT_OUTPUT_FORMAT),
        stream=stream,
        include_dirs=config.get(f"{ConfigKey.OUTPUT}.{ConfigKey.INCLUDE_DIRS}", False),
    )
    walker = create_walker(config, visitor, logger)

    logger.debug(
        "Starting walk",
        root=root,
        includes=len(walker.includes),
        excludes=len(walker.excludes),
        case_sensitive=walker.case_sensitive,
    )
    walker.start(root)

    stats = walker.last_stats
    logger.info(
        "Selection finished",
        files=stats.files_visited,
        dirs=stats.dirs_visited,
        errors=stats.errors,
    )
    return 0
