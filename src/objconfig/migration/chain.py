"""Ordered registry of migration steps."""

from collections.abc import Iterable

from objconfig.constants import LATEST_CONFIG_VERSION, LEGACY_CONFIG_VERSION
from objconfig.exceptions import UnsupportedConfigVersionError
from objconfig.migration.base import Migrator
from objconfig.migration.steps import MIGRATORS


class MigrationChain:
    """Contiguous sequence of steps, looked up by source version.

    Adding a new configuration version means registering one more step
    whose source_version equals the current latest_version.
    """

    def __init__(self, migrators: Iterable[Migrator] = ()) -> None:
        """Initialize chain, registering ``migrators`` in order.

        Raises:
            ValueError: If the steps do not form a contiguous chain

        """
        self._migrators: list[Migrator] = []
        self._by_version: dict[str, int] = {}
        for migrator in migrators:
            self.register(migrator)

    def __len__(self) -> int:
        return len(self._migrators)

    def __iter__(self):
        return iter(self._migrators)

    @property
    def first_version(self) -> str:
        """Oldest version the chain can migrate from."""
        if not self._migrators:
            msg = "Migration chain is empty"
            raise ValueError(msg)
        return self._migrators[0].source_version

    @property
    def latest_version(self) -> str:
        """Version every migration ends at."""
        if not self._migrators:
            msg = "Migration chain is empty"
            raise ValueError(msg)
        return self._migrators[-1].target_version

    def register(self, migrator: Migrator) -> None:
        """Append a step continuing from the current latest version.

        Raises:
            ValueError: If the step does not start at latest_version

        """
        if self._migrators and (
            migrator.source_version != self.latest_version
        ):
            msg = (
                f"Step {migrator.phase} does not continue from "
                f"version {self.latest_version}"
            )
            raise ValueError(msg)

        self._by_version[migrator.source_version] = len(self._migrators)
        self._migrators.append(migrator)

    def get(self, version: str) -> Migrator | None:
        """Return the step upgrading ``version``, if any."""
        index = self._by_version.get(version)
        if index is None:
            return None
        return self._migrators[index]

    def is_supported(self, version: str) -> bool:
        """Return True for any version the chain knows about."""
        return version == self.latest_version or version in self._by_version

    def plan(self, version: str) -> list[Migrator]:
        """Return the steps needed to bring ``version`` up to date.

        Args:
            version: Version tag found on disk

        Returns:
            Steps in execution order, empty when already at latest

        Raises:
            UnsupportedConfigVersionError: For unknown version tags

        """
        if version == self.latest_version:
            return []

        index = self._by_version.get(version)
        if index is None:
            raise UnsupportedConfigVersionError(version, phase="planning")
        return self._migrators[index:]


def default_chain() -> MigrationChain:
    """Build the chain of all known steps, "1" through "11".

    Raises:
        ValueError: If the steps do not span LEGACY_CONFIG_VERSION to
            LATEST_CONFIG_VERSION

    """
    chain = MigrationChain(migrator_cls() for migrator_cls in MIGRATORS)
    if (
        chain.first_version != LEGACY_CONFIG_VERSION
        or chain.latest_version != LATEST_CONFIG_VERSION
    ):
        msg = (
            f"Migration steps span {chain.first_version} to "
            f"{chain.latest_version}, expected {LEGACY_CONFIG_VERSION} "
            f"to {LATEST_CONFIG_VERSION}"
        )
        raise ValueError(msg)
    return chain
