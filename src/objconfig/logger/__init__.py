"""Logging utilities for objconfig.

Architecture:
    Application -> QueueHandler -> Queue -> QueueListener Thread
                                                 |
                                      Console (stderr) + File Handlers

Rules for contributors:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Never attach handlers to child loggers
    4. Use %-formatting in log calls, never f-strings

Environment Variables:
    OBJCONFIG_LOG_DIR: Directory for objconfig.log (tests point it at /tmp)
    OBJCONFIG_LOG_LEVEL: Console log level override
"""

from objconfig.logger.formatters import ColoredConsoleFormatter
from objconfig.logger.handlers import ConfigurationError
from objconfig.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
    update_console_level,
)
from objconfig.logger.state import get_state

__all__ = [
    "ColoredConsoleFormatter",
    "ConfigurationError",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "get_state",
    "setup_logging",
    "update_console_level",
]
