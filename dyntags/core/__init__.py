"""dyntags Core - Shared utilities and infrastructure.

This module provides core utilities used throughout the dyntags codebase.

Import specific functions from submodules:
    from dyntags.core.config import ConfigManager
    from dyntags.core import constants
    from dyntags.core import logging
    from dyntags.core import validators
"""

# Re-export main module references for convenience
from dyntags.core import config, constants, logging, validators

__all__ = [
    "config",
    "constants",
    "logging",
    "validators",
]
