"""CLI argument parser for objconfig."""

import argparse
from argparse import Namespace
from collections.abc import Sequence

LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CLIParser:
    """Command-line argument parser for objconfig."""

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse (default: sys.argv[1:])

        Returns:
            Parsed arguments namespace

        """
        parser = self.create_parser()
        return parser.parse_args(argv)

    def create_parser(self) -> argparse.ArgumentParser:
        """Build the main parser with its subcommands."""
        parser = argparse.ArgumentParser(
            prog="objconfig",
            description="Object storage server configuration migration",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Upgrade the configuration in the default directory
  %(prog)s migrate

  # Upgrade a specific configuration directory
  %(prog)s migrate --config-dir /srv/objstore/conf

  # Show the on-disk version without changing anything
  %(prog)s status --config-dir /srv/objstore/conf
            """,
        )
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show objconfig version and exit",
        )
        parser.add_argument(
            "--log-level",
            choices=LOG_LEVEL_CHOICES,
            type=str.upper,
            help="Console log level",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands"
        )
        self._add_migrate_command(subparsers)
        self._add_status_command(subparsers)
        return parser

    @staticmethod
    def _add_config_dir_option(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--config-dir",
            help=(
                "Configuration directory "
                "(default: $OBJCONFIG_CONFIG_DIR or ~/.objstore)"
            ),
        )

    def _add_migrate_command(self, subparsers) -> None:
        migrate_parser = subparsers.add_parser(
            "migrate",
            help="Upgrade the stored configuration to the latest version",
        )
        self._add_config_dir_option(migrate_parser)

    def _add_status_command(self, subparsers) -> None:
        status_parser = subparsers.add_parser(
            "status",
            help="Show the stored configuration version",
        )
        self._add_config_dir_option(status_parser)
