"""Configuration migration package.

Architecture:
- base: JSON helpers, version detection and the Migrator step interface
- steps: the ten steps upgrading version 1 through 11
- chain: ordered registry dispatching steps by detected version
- driver: startup orchestration (migrate_config)
"""

from objconfig.migration.base import Migrator, detect_version
from objconfig.migration.chain import MigrationChain, default_chain
from objconfig.migration.driver import (
    MigrationDriver,
    MigrationResult,
    migrate_config,
)

__all__ = [
    "MigrationChain",
    "MigrationDriver",
    "MigrationResult",
    "Migrator",
    "default_chain",
    "detect_version",
    "migrate_config",
]
