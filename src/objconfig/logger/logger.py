"""Public logging API: setup_logging, get_logger and test helpers."""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from objconfig.logger.config import load_log_settings, set_console_level
from objconfig.logger.handlers import ROOT_LOGGER_NAME, setup_root_logger
from objconfig.logger.state import get_state

# Upper bound for draining the queue on flush
_FLUSH_TIMEOUT_SECONDS = 5.0


def flush_all_handlers() -> None:
    """Wait for queued records and flush every listener handler.

    Records may be dequeued but not yet written when the queue reports
    empty, so a short grace period precedes the explicit flush.
    """
    state = get_state()
    if state.queue_listener is None or state.log_queue is None:
        return

    start_time = time.time()
    while not state.log_queue.empty():
        if time.time() - start_time > _FLUSH_TIMEOUT_SECONDS:
            break
        time.sleep(0.01)
    time.sleep(0.1)

    for handler in state.queue_listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Configure logging and return the logger called ``name``.

    The root "objconfig" logger is initialized once; child loggers such as
    "objconfig.migration.driver" propagate to it.

    Args:
        name: Logger name, typically __name__
        console_level: Console log level ("DEBUG", "INFO", "WARNING")
        file_level: File log level ("DEBUG", "INFO")
        log_file: Path to log file
        enable_file_logging: Whether to enable file logging

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            cfg_console, cfg_file, cfg_path = load_log_settings()
            setup_root_logger(
                state,
                console_level or cfg_console,
                file_level or cfg_file,
                log_file or cfg_path,
                enable_file_logging,
            )

    return logging.getLogger(name)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a logger, initializing the root logger on first use.

    Example:
        >>> from objconfig.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Migrated %s to version %s", path, version)

    """
    return setup_logging(name=name)


def update_console_level(level: str) -> None:
    """Apply a console level chosen at runtime (e.g. from the CLI)."""
    set_console_level(get_state(), level)


def clear_logger_state() -> None:
    """Stop the listener and strip handlers from all objconfig loggers.

    Intended for tests only. Logger objects stay registered, so module
    level loggers keep working once the next get_logger() call
    initializes the root logger again.
    """
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            flush_all_handlers()
            state.queue_listener.stop()
            for handler in state.queue_listener.handlers:
                handler.close()
            state.queue_listener = None

        state.log_queue = None
        state.root_initialized = False

        for logger_name in list(logging.Logger.manager.loggerDict.keys()):
            if logger_name.startswith(ROOT_LOGGER_NAME):
                log_instance = logging.getLogger(logger_name)
                for handler in log_instance.handlers[:]:
                    handler.close()
                    log_instance.removeHandler(handler)
