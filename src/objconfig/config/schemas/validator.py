"""JSON Schema validation for configuration documents.

Schemas live next to this module as ``<name>.schema.json`` files and are
validated with Draft 7 semantics.
"""

from pathlib import Path
from typing import Any

import orjson
from jsonschema import Draft7Validator, ValidationError
from jsonschema.exceptions import best_match

from objconfig.logger import get_logger

logger = get_logger(__name__)

SCHEMA_DIR = Path(__file__).parent

ENVELOPE_SCHEMA = "envelope"
LEGACY_V1_SCHEMA = "legacy_v1"
CONFIG_V2_SCHEMA = "config_v2"
CONFIG_V3_SCHEMA = "config_v3"

SCHEMA_NAMES = (
    ENVELOPE_SCHEMA,
    LEGACY_V1_SCHEMA,
    CONFIG_V2_SCHEMA,
    CONFIG_V3_SCHEMA,
)


class SchemaValidationError(Exception):
    """Raised when JSON schema validation fails."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        schema_type: str | None = None,
    ) -> None:
        """Initialize schema validation error.

        Args:
            message: Error message
            path: JSON path where error occurred
            schema_type: Name of the schema being validated

        """
        self.path = path
        self.schema_type = schema_type
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message with schema and path information."""
        parts = []
        if self.schema_type:
            parts.append(f"[{self.schema_type}]")
        if self.path:
            parts.append(f"at '{self.path}'")
        if parts:
            return f"{' '.join(parts)}: {super().__str__()}"
        return super().__str__()


class ConfigValidator:
    """Validates configuration documents against the bundled schemas."""

    def __init__(self, schema_dir: Path = SCHEMA_DIR) -> None:
        """Load every known schema and build its validator."""
        self._validators = {
            name: Draft7Validator(
                self._load_schema(schema_dir / f"{name}.schema.json")
            )
            for name in SCHEMA_NAMES
        }

    @staticmethod
    def _load_schema(schema_path: Path) -> dict[str, Any]:
        """Load JSON schema from file.

        Raises:
            FileNotFoundError: If schema file doesn't exist
            ValueError: If schema JSON is invalid

        """
        if not schema_path.exists():
            msg = f"Schema file not found: {schema_path}"
            raise FileNotFoundError(msg)

        try:
            with schema_path.open("rb") as f:
                return orjson.loads(f.read())  # type: ignore[no-any-return]
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON in schema file {schema_path}: {e}"
            raise ValueError(msg) from e

    @staticmethod
    def _format_validation_error(error: ValidationError) -> str:
        """Turn a jsonschema error into a short readable message."""
        if error.validator == "required":
            missing = (
                error.message.split("'")[1]
                if "'" in error.message
                else "unknown"
            )
            return f"Missing required field: '{missing}'"
        if error.validator == "type":
            expected_type = error.validator_value
            actual = type(error.instance).__name__
            return f"Expected type '{expected_type}', got '{actual}'"
        return error.message

    def validate(self, document: Any, schema_name: str) -> None:
        """Validate ``document`` against the named schema.

        Args:
            document: Decoded JSON value
            schema_name: One of SCHEMA_NAMES

        Raises:
            KeyError: If the schema name is unknown
            SchemaValidationError: If validation fails

        """
        validator = self._validators[schema_name]
        errors = list(validator.iter_errors(document))
        if not errors:
            logger.debug("Schema validation passed: %s", schema_name)
            return

        best_error = best_match(errors)
        path = (
            ".".join(str(p) for p in best_error.absolute_path)
            if best_error.absolute_path
            else None
        )
        raise SchemaValidationError(
            self._format_validation_error(best_error),
            path=path,
            schema_type=schema_name,
        )


_validator: ConfigValidator | None = None


def get_validator() -> ConfigValidator:
    """Get or create the shared validator instance."""
    global _validator  # noqa: PLW0603
    if _validator is None:
        _validator = ConfigValidator()
    return _validator


def validate_document(document: Any, schema_name: str) -> None:
    """Validate a document with the shared validator (convenience wrapper).

    Raises:
        SchemaValidationError: If validation fails

    """
    get_validator().validate(document, schema_name)
