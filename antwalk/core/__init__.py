"""antwalk Core - Shared utilities and infrastructure.

Import specific names from submodules:
    from antwalk.core.config import ConfigManager
    from antwalk.core.logging import Logger
    from antwalk.core.validators import ValidationError
    from antwalk.core import constants
"""

from antwalk.core import config, constants, logging, validators

__all__ = [
    "config",
    "constants",
    "logging",
    "validators",
]
