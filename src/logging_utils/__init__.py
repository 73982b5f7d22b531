#!/usr/bin/env python3
"""
Utility module for configuring logging across the codebase.

Every module asks for its logger through get_logger() and the CLI calls
configure_logging() once, so all output lands on stderr in the same format.
"""

import inspect
import logging
import sys
from typing import Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(levelname)s - %(name)s - %(message)s'
SHORT_LOG_FORMAT = '%(levelname)s - %(message)s'


def get_logger(module_name: Optional[str] = None) -> logging.Logger:
    """Get a logger for the calling module.

    Args:
        module_name: Name of the logger. If None, the caller's module name is used.

    Returns:
        A logger that propagates to the handler installed by configure_logging().
    """
    if module_name is None:
        frame = inspect.currentframe()
        if frame:
            try:
                frame = frame.f_back
                if frame and frame.f_globals.get('__name__'):
                    module_name = frame.f_globals['__name__']
            finally:
                # Always delete the frame reference to avoid reference cycles
                del frame

    return logging.getLogger(module_name)


def configure_logging(verbose: bool = False,
                      specific_logger: Optional[logging.Logger] = None,
                      include_module_name: bool = True) -> logging.Logger:
    """Configure logging for the application.

    Installs a single stderr handler on the root logger (or on specific_logger)
    and sets the level from the verbose flag.

    Args:
        verbose: Whether to enable verbose (DEBUG) logging.
        specific_logger: Optional logger to configure instead of the root logger.
        include_module_name: Whether to include the logger name in each line.

    Returns:
        The configured logger.
    """
    target_logger = specific_logger if specific_logger else logging.getLogger()

    # Remove existing handlers to prevent duplicate logs
    for handler in target_logger.handlers[:]:
        target_logger.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(LOG_FORMAT if include_module_name else SHORT_LOG_FORMAT))
    target_logger.addHandler(console)

    level = logging.DEBUG if verbose else logging.INFO
    target_logger.setLevel(level)
    logger.debug(f"Logging configured at level: {logging.getLevelName(level)}")

    return target_logger
