"""Main CLI entry point for objconfig."""

import sys

from objconfig.cli import CLIRunner
from objconfig.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Run the CLI application and exit with its status code."""
    try:
        sys.exit(CLIRunner().run())
    except KeyboardInterrupt:
        logger.info("CLI cancelled by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
