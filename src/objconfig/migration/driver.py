"""Startup-time orchestration of configuration migration.

State machine over (legacy artifact present, unified document version):
    1. nothing on disk               -> fresh install, nothing to do
    2. legacy only                   -> fold into version 2, purge legacy
    3. legacy and unified both exist -> earlier run stopped between save and
                                        purge; migrate unified, then purge
                                        legacy once every step succeeded
    4. unified at version n          -> run steps n .. latest-1 in order

Every step is saved before the next one starts, so an aborted run leaves
the document at the last version written and the next startup resumes
from there.
"""

from dataclasses import dataclass, field
from pathlib import Path

from objconfig.config.paths import ConfigPaths
from objconfig.config.store import ConfigStore
from objconfig.constants import LEGACY_CONFIG_VERSION
from objconfig.exceptions import (
    ConfigIOError,
    UnsupportedConfigVersionError,
)
from objconfig.logger import get_logger
from objconfig.migration.base import detect_version
from objconfig.migration.chain import MigrationChain, default_chain

logger = get_logger(__name__)


@dataclass
class MigrationResult:
    """Outcome of one migration run."""

    initial_version: str | None = None
    final_version: str | None = None
    steps_applied: list[str] = field(default_factory=list)
    legacy_purged: bool = False

    @property
    def migrated(self) -> bool:
        """True if at least one step rewrote the configuration."""
        return bool(self.steps_applied)


class MigrationDriver:
    """Bring the configuration directory up to the latest version."""

    def __init__(
        self, store: ConfigStore, chain: MigrationChain | None = None
    ) -> None:
        """Initialize driver.

        Args:
            store: Store bound to the configuration directory
            chain: Migration steps (default: all known steps)

        """
        self.store = store
        self.chain = chain if chain is not None else default_chain()

    @property
    def paths(self) -> ConfigPaths:
        return self.store.paths

    def run(self) -> MigrationResult:
        """Run the migration to completion or to the first failure.

        Returns:
            MigrationResult describing what was done

        Raises:
            ConfigParseError: If a document is malformed
            UnsupportedConfigVersionError: If a version tag is unknown
            ConfigIOError: If the filesystem fails

        """
        result = MigrationResult()
        stale_legacy = self._handle_legacy(result)

        config_file = self.paths.config_file
        data = self.store.load(config_file)
        if data is None:
            logger.debug(
                "No config found in %s, nothing to migrate",
                self.paths.config_dir,
            )
            return result

        version = detect_version(data, config_file)
        if result.initial_version is None:
            result.initial_version = version

        if version == LEGACY_CONFIG_VERSION or not self.chain.is_supported(
            version
        ):
            raise UnsupportedConfigVersionError(
                version, target=str(config_file), phase="version detection"
            )

        steps = self.chain.plan(version)
        if steps:
            logger.info(
                "Config %s is at version %s, migrating to %s",
                config_file,
                version,
                self.chain.latest_version,
            )

        for step in steps:
            if not step.migrate(self.store):
                msg = "config file disappeared during migration"
                raise ConfigIOError(
                    msg, target=str(config_file), phase=step.phase
                )
            result.steps_applied.append(step.phase)

        # Only after config.json passed every check and step
        if stale_legacy:
            logger.warning(
                "Removing already migrated legacy file %s",
                self.paths.legacy_file,
            )
            self.store.purge(self.paths.legacy_file)
            result.legacy_purged = True

        result.final_version = self.chain.latest_version
        return result

    def _handle_legacy(self, result: MigrationResult) -> bool:
        """Fold the legacy credential file into config.json, if present.

        Runs on every startup: a crash between saving config.json and
        purging the legacy file leaves both on disk. That file is left in
        place here and purged by run() after config.json has migrated.

        Returns:
            True if a stale legacy file sits next to config.json

        """
        legacy_file = self.paths.legacy_file
        legacy_data = self.store.load(legacy_file)
        if legacy_data is None:
            return False

        if self.store.exists(self.paths.config_file):
            logger.info(
                "Found both %s and %s, legacy file is removed after migration",
                legacy_file,
                self.paths.config_file,
            )
            return True

        version = detect_version(legacy_data, legacy_file)
        step = self.chain.get(LEGACY_CONFIG_VERSION)
        if version != LEGACY_CONFIG_VERSION or step is None:
            raise UnsupportedConfigVersionError(
                version, target=str(legacy_file), phase="legacy migration"
            )

        step.migrate(self.store)
        result.initial_version = LEGACY_CONFIG_VERSION
        result.steps_applied.append(step.phase)
        result.legacy_purged = True
        return False


def migrate_config(config_dir: Path | str | None = None) -> MigrationResult:
    """Migrate the configuration in ``config_dir`` to the latest version.

    Called once at startup, before the configuration is parsed into its
    runtime form.

    Args:
        config_dir: Configuration directory (default: OBJCONFIG_CONFIG_DIR
            or ~/.objstore)

    Returns:
        MigrationResult describing what was done

    Raises:
        ConfigMigrationError: If migration fails; startup must not proceed

    """
    paths = (
        ConfigPaths(Path(config_dir))
        if config_dir is not None
        else ConfigPaths.from_env()
    )
    return MigrationDriver(ConfigStore(paths)).run()
