"""CLI runner for objconfig.

Routes parsed arguments to the migrate and status commands.
"""

from argparse import Namespace
from collections.abc import Sequence
from pathlib import Path

from objconfig import __version__
from objconfig.config import ConfigPaths, ConfigStore
from objconfig.constants import LEGACY_CONFIG_VERSION
from objconfig.exceptions import ConfigMigrationError
from objconfig.logger import get_logger, update_console_level
from objconfig.migration import MigrationDriver, detect_version
from objconfig.migration.chain import default_chain

from .parser import CLIParser

logger = get_logger(__name__)


class CLIRunner:
    """CLI command runner."""

    def __init__(self, parser: CLIParser | None = None) -> None:
        self.parser = parser or CLIParser()

    def run(self, argv: Sequence[str] | None = None) -> int:
        """Parse ``argv`` and execute the selected command.

        Returns:
            Process exit code

        """
        args = self.parser.parse_args(argv)

        if args.log_level:
            update_console_level(args.log_level)

        if args.version:
            print(f"objconfig {__version__}")
            return 0

        if args.command == "migrate":
            return self._run_migrate(args)
        if args.command == "status":
            return self._run_status(args)

        self.parser.create_parser().print_help()
        return 1

    @staticmethod
    def _resolve_paths(args: Namespace) -> ConfigPaths:
        if args.config_dir:
            return ConfigPaths(Path(args.config_dir))
        return ConfigPaths.from_env()

    def _run_migrate(self, args: Namespace) -> int:
        paths = self._resolve_paths(args)
        driver = MigrationDriver(ConfigStore(paths))
        try:
            result = driver.run()
        except ConfigMigrationError as e:
            logger.error("%s", e)  # noqa: TRY400
            return 1

        if result.final_version is None:
            print(f"No configuration found in {paths.config_dir}")
        elif result.migrated:
            print(
                f"Migrated {paths.config_file} from version "
                f"{result.initial_version} to {result.final_version}"
            )
        else:
            print(
                f"{paths.config_file} is already at version "
                f"{result.final_version}"
            )
        return 0

    def _run_status(self, args: Namespace) -> int:
        paths = self._resolve_paths(args)
        store = ConfigStore(paths)
        latest = default_chain().latest_version

        legacy_present = store.exists(paths.legacy_file)

        data = store.load(paths.config_file)
        if data is None:
            if legacy_present:
                print(
                    f"{paths.legacy_file}: version {LEGACY_CONFIG_VERSION} "
                    "(needs migration, legacy)"
                )
            else:
                print(f"No configuration found in {paths.config_dir}")
            return 0

        if legacy_present:
            print(
                f"Legacy credential file: {paths.legacy_file} "
                "(removed after the next successful migrate)"
            )

        try:
            version = detect_version(data, paths.config_file)
        except ConfigMigrationError as e:
            logger.error("%s", e)  # noqa: TRY400
            return 1

        state = "up to date" if version == latest else "needs migration"
        print(f"{paths.config_file}: version {version} ({state})")
        return 0
