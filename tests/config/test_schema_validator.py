"""Tests for JSON schema validation of configuration documents."""

import pytest

from objconfig.config.schemas import (
    CONFIG_V2_SCHEMA,
    CONFIG_V3_SCHEMA,
    ENVELOPE_SCHEMA,
    LEGACY_V1_SCHEMA,
    ConfigValidator,
    SchemaValidationError,
    validate_document,
)


@pytest.fixture
def validator() -> ConfigValidator:
    """Fresh validator loaded from the bundled schema files."""
    return ConfigValidator()


class TestEnvelope:
    """Test cases for the version envelope schema."""

    def test_valid_envelope(self, validator: ConfigValidator) -> None:
        """Test a document with only a version passes."""
        validator.validate({"version": "7"}, ENVELOPE_SCHEMA)

    def test_missing_version(self, validator: ConfigValidator) -> None:
        """Test missing version is reported as required field."""
        with pytest.raises(SchemaValidationError) as exc_info:
            validator.validate({"credential": {}}, ENVELOPE_SCHEMA)

        assert "Missing required field: 'version'" in str(exc_info.value)
        assert exc_info.value.schema_type == ENVELOPE_SCHEMA

    def test_numeric_version_rejected(
        self, validator: ConfigValidator
    ) -> None:
        """Test that the version must be a string."""
        with pytest.raises(SchemaValidationError) as exc_info:
            validator.validate({"version": 2}, ENVELOPE_SCHEMA)

        assert exc_info.value.path == "version"
        assert "Expected type 'string'" in str(exc_info.value)


class TestCredentialSchemas:
    """Test cases for the per-version credential layouts."""

    def test_legacy_document(self, validator: ConfigValidator) -> None:
        """Test a legacy credential file passes."""
        validator.validate(
            {
                "version": "1",
                "accessKeyId": "abcde",
                "secretAccessKey": "abcdefgh",
            },
            LEGACY_V1_SCHEMA,
        )

    def test_legacy_missing_secret(self, validator: ConfigValidator) -> None:
        """Test a legacy file without secret key fails."""
        with pytest.raises(SchemaValidationError, match="secretAccessKey"):
            validator.validate(
                {"version": "1", "accessKeyId": "abcde"}, LEGACY_V1_SCHEMA
            )

    def test_v2_nested_credentials_path(
        self, validator: ConfigValidator
    ) -> None:
        """Test errors inside credentials report their JSON path."""
        document = {
            "version": "2",
            "credentials": {"accessKeyId": "a", "secretAccessKey": 5},
        }

        with pytest.raises(SchemaValidationError) as exc_info:
            validator.validate(document, CONFIG_V2_SCHEMA)

        assert exc_info.value.path == "credentials.secretAccessKey"

    def test_v3_requires_region(self, validator: ConfigValidator) -> None:
        """Test that version 3+ documents carry a region."""
        document = {
            "version": "3",
            "credential": {"accessKey": "a", "secretKey": "s"},
        }

        with pytest.raises(SchemaValidationError, match="region"):
            validator.validate(document, CONFIG_V3_SCHEMA)

    def test_v3_notify_targets_must_be_objects(
        self, validator: ConfigValidator
    ) -> None:
        """Test notify target maps hold objects only."""
        document = {
            "version": "7",
            "credential": {"accessKey": "a", "secretKey": "s"},
            "region": "us-east-1",
            "notify": {"amqp": {"1": "enabled"}},
        }

        with pytest.raises(SchemaValidationError) as exc_info:
            validator.validate(document, CONFIG_V3_SCHEMA)

        assert exc_info.value.path == "notify.amqp.1"


def test_unknown_schema_name() -> None:
    """Test that asking for an unknown schema is a programming error."""
    with pytest.raises(KeyError):
        validate_document({"version": "1"}, "config_v99")


def test_error_string_formatting() -> None:
    """Test SchemaValidationError formatting with and without context."""
    assert str(SchemaValidationError("boom")) == "boom"
    error = SchemaValidationError("boom", path="a.b", schema_type="config_v2")
    assert str(error) == "[config_v2] at 'a.b': boom"
