"""Centralized constants module for objconfig.

This module is the single source of truth for configuration versions, file
names and logging settings shared across the package. Constants use
typing.Final annotations to ensure immutability.

Usage:
    from objconfig.constants import LATEST_CONFIG_VERSION
"""

from typing import Final

# =============================================================================
# Configuration Version Constants
# =============================================================================

# Version tag of the legacy credential artifact
LEGACY_CONFIG_VERSION: Final[str] = "1"

# First version stored in the unified configuration document
FIRST_UNIFIED_CONFIG_VERSION: Final[str] = "2"

# Current configuration version, every startup migrates up to this one
LATEST_CONFIG_VERSION: Final[str] = "11"

# Envelope field holding the version tag in every document
KEY_VERSION: Final[str] = "version"

# =============================================================================
# Configuration File Constants
# =============================================================================

# Default configuration directory under the user's home directory
DEFAULT_CONFIG_SUBDIR: Final[str] = ".objstore"

# Environment variable overriding the configuration directory
CONFIG_DIR_ENV_VAR: Final[str] = "OBJCONFIG_CONFIG_DIR"

# Pre-unification credential file (version 1 only)
LEGACY_CONFIG_FILE_NAME: Final[str] = "fsUsers.json"

# Unified configuration document (version 2 onward)
CONFIG_FILE_NAME: Final[str] = "config.json"

# Temporary files written next to the target during atomic saves
CONFIG_TMP_PREFIX: Final[str] = ".config-"
CONFIG_TMP_SUFFIX: Final[str] = ".tmp"

# =============================================================================
# Document Defaults
# =============================================================================

DEFAULT_REGION: Final[str] = "us-east-1"
DEFAULT_ADDRESS: Final[str] = ":9000"

DEFAULT_CONSOLE_LOGGER_LEVEL: Final[str] = "fatal"
DEFAULT_FILE_LOGGER_LEVEL: Final[str] = "error"
DEFAULT_SYSLOG_LOGGER_LEVEL: Final[str] = "debug"
DEFAULT_TARGET_LOGGER_LEVEL: Final[str] = "error"

# Target identifier used for default notification entries
DEFAULT_NOTIFY_TARGET_ID: Final[str] = "1"

# =============================================================================
# Logging Constants
# =============================================================================

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"

# Environment overrides for bootstrap logging
LOG_DIR_ENV_VAR: Final[str] = "OBJCONFIG_LOG_DIR"
LOG_LEVEL_ENV_VAR: Final[str] = "OBJCONFIG_LOG_LEVEL"

LOG_FILE_NAME: Final[str] = "objconfig.log"
LOG_SUBDIR: Final[tuple[str, ...]] = (".config", "objconfig", "logs")

LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024  # 1 MB
LOG_BACKUP_COUNT: Final[int] = 3

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Color mapping for console output levels
LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}
