"""JSON Schema validation package for objconfig.

Usage:
    from objconfig.config.schemas import (
        CONFIG_V2_SCHEMA,
        SchemaValidationError,
        validate_document,
    )

    try:
        validate_document(document, CONFIG_V2_SCHEMA)
    except SchemaValidationError as e:
        print(f"Validation failed: {e}")
"""

from objconfig.config.schemas.validator import (
    CONFIG_V2_SCHEMA,
    CONFIG_V3_SCHEMA,
    ENVELOPE_SCHEMA,
    LEGACY_V1_SCHEMA,
    ConfigValidator,
    SchemaValidationError,
    get_validator,
    validate_document,
)

__all__ = [
    "CONFIG_V2_SCHEMA",
    "CONFIG_V3_SCHEMA",
    "ENVELOPE_SCHEMA",
    "LEGACY_V1_SCHEMA",
    "ConfigValidator",
    "SchemaValidationError",
    "get_validator",
    "validate_document",
]
