"""Base migration utilities.

Common functionality shared by every migration step:
- JSON decoding/encoding of stored documents
- Version envelope detection
- The Migrator step interface
"""

import copy
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar

import orjson

from objconfig.config.paths import ConfigPaths
from objconfig.config.schemas import (
    CONFIG_V3_SCHEMA,
    ENVELOPE_SCHEMA,
    SchemaValidationError,
    validate_document,
)
from objconfig.config.store import ConfigStore
from objconfig.constants import KEY_VERSION
from objconfig.exceptions import ConfigParseError
from objconfig.logger import get_logger

logger = get_logger(__name__)


def decode_document(
    data: bytes,
    source: Path | None = None,
    phase: str | None = None,
) -> dict[str, Any]:
    """Decode raw bytes into a JSON object.

    Args:
        data: Raw document content
        source: Optional path used in error messages
        phase: Optional phase name used in error messages

    Returns:
        Decoded document

    Raises:
        ConfigParseError: If the bytes are not a JSON object

    """
    target = str(source) if source else None
    try:
        document = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise ConfigParseError(msg, target=target, phase=phase) from e

    if not isinstance(document, dict):
        msg = f"Expected a JSON object, got {type(document).__name__}"
        raise ConfigParseError(msg, target=target, phase=phase)
    return document


def encode_document(document: dict[str, Any]) -> bytes:
    """Serialize a document the way it is stored on disk."""
    return orjson.dumps(document, option=orjson.OPT_INDENT_2)


def check_schema(
    document: dict[str, Any],
    schema_name: str,
    source: Path | None = None,
    phase: str | None = None,
) -> None:
    """Validate a decoded document, reporting failures as parse errors.

    Raises:
        ConfigParseError: If the document does not match the schema

    """
    try:
        validate_document(document, schema_name)
    except SchemaValidationError as e:
        raise ConfigParseError(
            str(e), target=str(source) if source else None, phase=phase
        ) from e


def detect_version(data: bytes, source: Path | None = None) -> str:
    """Read only the version envelope of a stored document.

    The rest of the document is not validated here; that is the job of the
    migration step selected for the detected version.

    Args:
        data: Raw document content
        source: Optional path used in error messages

    Returns:
        Version tag, e.g. "2"

    Raises:
        ConfigParseError: If the document is malformed or has no string
            version field

    """
    phase = "version detection"
    document = decode_document(data, source, phase)
    check_schema(document, ENVELOPE_SCHEMA, source, phase)
    return document[KEY_VERSION]  # type: ignore[no-any-return]


class Migrator(ABC):
    """One step upgrading a stored document from one version to the next.

    Contract shared by every step:
        - source document absent: nothing happens, migrate() returns False
        - source document malformed or off-schema: ConfigParseError, no write
        - otherwise the transformed document is saved with the new version
          tag and migrate() returns True

    Steps trust their caller to have established the source version; they
    only check that the document exists and is well formed.
    """

    source_version: ClassVar[str]
    target_version: ClassVar[str]
    schema_name: ClassVar[str] = CONFIG_V3_SCHEMA

    @property
    def phase(self) -> str:
        """Human readable step name used in errors and logs."""
        return f"migrate {self.source_version} -> {self.target_version}"

    def source_path(self, paths: ConfigPaths) -> Path:
        """File this step reads from."""
        return paths.config_file

    def migrate(self, store: ConfigStore) -> bool:
        """Run this step against the documents managed by ``store``.

        Returns:
            True if a new document was written, False if there was nothing
            to migrate

        Raises:
            ConfigParseError: If the source document is malformed
            ConfigIOError: If reading or writing fails

        """
        source = self.source_path(store.paths)
        data = store.load(source)
        if data is None:
            logger.debug("%s: %s not found, nothing to do", self.phase, source)
            return False

        document = decode_document(data, source, self.phase)
        check_schema(document, self.schema_name, source, self.phase)

        migrated = self.transform(copy.deepcopy(document))
        migrated[KEY_VERSION] = self.target_version

        store.save(store.paths.config_file, encode_document(migrated))
        self.after_save(store, source)

        logger.info(
            "Migrated config from version %s to %s",
            self.source_version,
            self.target_version,
        )
        return True

    def after_save(self, store: ConfigStore, source: Path) -> None:
        """Hook run once the migrated document is durable."""

    @abstractmethod
    def transform(self, document: dict[str, Any]) -> dict[str, Any]:
        """Build the next-version document from a private copy.

        Args:
            document: Deep copy of the validated source document

        Returns:
            Next-version document; the version tag is set by the caller

        """
