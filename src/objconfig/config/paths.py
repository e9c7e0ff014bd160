"""Path value object for the configuration directory.

The directory is always passed in explicitly; nothing in the package keeps
a process-wide override.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from objconfig.constants import (
    CONFIG_DIR_ENV_VAR,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_SUBDIR,
    LEGACY_CONFIG_FILE_NAME,
)


@dataclass(frozen=True)
class ConfigPaths:
    """Locations of the configuration files inside one directory."""

    config_dir: Path

    def __post_init__(self) -> None:
        """Normalize the directory to an expanded Path."""
        object.__setattr__(
            self, "config_dir", Path(self.config_dir).expanduser()
        )

    @property
    def legacy_file(self) -> Path:
        """Path to the version-1 credential artifact."""
        return self.config_dir / LEGACY_CONFIG_FILE_NAME

    @property
    def config_file(self) -> Path:
        """Path to the unified configuration document."""
        return self.config_dir / CONFIG_FILE_NAME

    @classmethod
    def default_dir(cls) -> Path:
        """Return the directory used when none is configured."""
        return Path.home() / DEFAULT_CONFIG_SUBDIR

    @classmethod
    def from_env(cls) -> "ConfigPaths":
        """Build paths from OBJCONFIG_CONFIG_DIR or the default directory.

        Example:
            >>> ConfigPaths.from_env().config_file
            PosixPath('/home/user/.objstore/config.json')

        """
        env_dir = os.getenv(CONFIG_DIR_ENV_VAR)
        if env_dir:
            return cls(Path(env_dir))
        return cls(cls.default_dir())
