"""Console formatter for the objconfig logging system."""

import logging

from objconfig.constants import LOG_COLORS


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter adding ANSI colors to the level name.

    The level name is swapped on the record only for the duration of
    format() and restored afterwards, so file handlers sharing the record
    never see escape codes.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a colored level name.

        Args:
            record: The log record to format

        Returns:
            Formatted log message

        """
        if record.levelname not in LOG_COLORS:
            return super().format(record)

        original_levelname = record.levelname
        record.levelname = (
            f"{LOG_COLORS[original_levelname]}{original_levelname}"
            f"{LOG_COLORS['RESET']}"
        )
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname
