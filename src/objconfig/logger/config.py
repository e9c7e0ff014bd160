"""Bootstrap settings and runtime level updates for the logging system."""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from objconfig.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    LOG_DIR_ENV_VAR,
    LOG_FILE_NAME,
    LOG_LEVEL_ENV_VAR,
    LOG_SUBDIR,
)

if TYPE_CHECKING:
    from objconfig.logger.state import _LoggerState


def load_log_settings() -> tuple[str, str, Path]:
    """Load console level, file level and log file path.

    Environment Variable Override:
        OBJCONFIG_LOG_DIR: Directory for objconfig.log. The test suite sets
        it so that test runs never write into the user's home directory.
        OBJCONFIG_LOG_LEVEL: Console level (DEBUG, INFO, WARNING, ...).

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    console_level = os.getenv(LOG_LEVEL_ENV_VAR, "").upper()
    if console_level not in logging.getLevelNamesMapping():
        console_level = DEFAULT_CONSOLE_LOG_LEVEL

    env_log_dir = os.getenv(LOG_DIR_ENV_VAR)
    if env_log_dir:
        log_path = Path(env_log_dir).expanduser() / LOG_FILE_NAME
    else:
        log_path = Path.home().joinpath(*LOG_SUBDIR) / LOG_FILE_NAME

    return console_level, DEFAULT_LOG_LEVEL, log_path


def set_console_level(state: "_LoggerState", level: str) -> None:
    """Update the console handler level at runtime.

    Only handler levels change; handlers are never added or removed.

    Args:
        state: Logger state object (from logger.state module)
        level: Level name such as "DEBUG" or "ERROR"

    """
    if state.queue_listener is None:
        return

    console_level = getattr(logging, level.upper(), logging.WARNING)
    for handler in state.queue_listener.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, RotatingFileHandler
        ):
            handler.setLevel(console_level)
