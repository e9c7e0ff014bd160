"""Exception classes for objconfig operations.

A missing configuration file is not an error: ConfigStore.load returns None
for it. Everything below is fatal to startup.
"""


class ConfigMigrationError(Exception):
    """Base exception for configuration migration failures."""

    error_prefix: str = "Config migration failed"

    def __init__(
        self,
        message: str,
        target: str | None = None,
        phase: str | None = None,
    ) -> None:
        """Initialize error with message, optional target and phase.

        Args:
            message: Error message describing the failure.
            target: Optional path of the file involved.
            phase: Optional name of the migration phase that failed,
                e.g. "migrate 4 -> 5" or "legacy purge".

        """
        super().__init__(message)
        self.message = message
        self.target = target
        self.phase = phase

    def __str__(self) -> str:
        """Return formatted error message."""
        prefix = self.error_prefix
        if self.phase:
            prefix = f"{prefix} during {self.phase}"
        if self.target:
            return f"{prefix} for '{self.target}': {self.message}"
        return f"{prefix}: {self.message}"


class ConfigParseError(ConfigMigrationError):
    """Raised when a document is not valid structured data."""

    error_prefix = "Config parse failed"


class UnsupportedConfigVersionError(ConfigMigrationError):
    """Raised when the version tag is outside the known range."""

    error_prefix = "Unsupported config version"

    def __init__(
        self,
        version: str,
        target: str | None = None,
        phase: str | None = None,
    ) -> None:
        """Initialize with the offending version tag."""
        super().__init__(
            f"version {version!r} is not supported",
            target=target,
            phase=phase,
        )
        self.version = version


class ConfigIOError(ConfigMigrationError):
    """Raised when reading, writing or removing a config file fails."""

    error_prefix = "Config I/O failed"
