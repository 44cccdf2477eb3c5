"""Common utilities for envquack.

This package provides the configuration and logging setup shared by the
readers, the use cases and the CLI.
"""

from packages.common.config import EnvQuackConfig, get_config
from packages.common.logging import get_logger, setup_logging

__all__ = [
    "EnvQuackConfig",
    "get_config",
    "get_logger",
    "setup_logging",
]
