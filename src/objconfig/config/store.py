"""Durable storage for raw configuration documents.

ConfigStore deals in bytes only. JSON decoding and schema checks belong to
the migration layer.
"""

import os
import tempfile
from pathlib import Path

from objconfig.config.paths import ConfigPaths
from objconfig.constants import CONFIG_TMP_PREFIX, CONFIG_TMP_SUFFIX
from objconfig.exceptions import ConfigIOError
from objconfig.logger import get_logger

logger = get_logger(__name__)


class ConfigStore:
    """Read, atomically replace and delete configuration files."""

    def __init__(self, paths: ConfigPaths) -> None:
        """Initialize store for one configuration directory.

        Args:
            paths: Configuration paths this store operates on

        """
        self.paths = paths

    def exists(self, path: Path) -> bool:
        """Return True if ``path`` is present on disk."""
        return path.exists()

    def load(self, path: Path) -> bytes | None:
        """Read the whole document at ``path``.

        Args:
            path: File to read

        Returns:
            File content, or None if the file does not exist

        Raises:
            ConfigIOError: On any other read failure

        """
        try:
            with path.open("rb") as f:
                return f.read()
        except FileNotFoundError:
            logger.debug("Config file not found: %s", path)
            return None
        except OSError as e:
            raise ConfigIOError(str(e), target=str(path), phase="load") from e

    def save(self, path: Path, data: bytes) -> None:
        """Replace ``path`` with ``data`` atomically.

        The content is written to a temporary file in the same directory,
        synced to disk and renamed over the target, so readers see either
        the old document or the new one. A failed directory sync after the
        rename is only logged, since the new document is already in place.

        Args:
            path: Destination file
            data: Serialized document

        Raises:
            ConfigIOError: If the document could not be written or renamed

        """
        temp_path: Path | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=path.parent,
                prefix=CONFIG_TMP_PREFIX,
                suffix=CONFIG_TMP_SUFFIX,
                delete=False,
            ) as tmp_file:
                temp_path = Path(tmp_file.name)
                tmp_file.write(data)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())

            temp_path.replace(path)
            temp_path = None
        except OSError as e:
            raise ConfigIOError(str(e), target=str(path), phase="save") from e
        finally:
            # Only set when the rename did not happen
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)

        try:
            self._sync_directory(path.parent)
        except OSError as e:
            logger.warning(
                "Saved %s but could not sync its directory: %s", path, e
            )

        logger.debug("Saved config to %s (%d bytes)", path, len(data))

    def purge(self, path: Path) -> None:
        """Remove ``path``; an already absent file counts as success.

        Raises:
            ConfigIOError: If the file exists but cannot be removed

        """
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise ConfigIOError(
                str(e), target=str(path), phase="purge"
            ) from e

        logger.debug("Purged config file %s", path)

    @staticmethod
    def _sync_directory(directory: Path) -> None:
        """Persist the rename by syncing the directory entry (POSIX only)."""
        if not hasattr(os, "O_DIRECTORY"):
            return

        fd = os.open(directory, os.O_RDONLY | os.O_DIRECTORY)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)
