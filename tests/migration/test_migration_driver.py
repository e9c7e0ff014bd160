"""Tests for the startup migration driver."""

from pathlib import Path

import orjson
import pytest

from objconfig.config import ConfigStore
from objconfig.constants import LATEST_CONFIG_VERSION
from objconfig.exceptions import (
    ConfigIOError,
    ConfigMigrationError,
    ConfigParseError,
    UnsupportedConfigVersionError,
)
from objconfig.migration import MigrationDriver, migrate_config

V2_CONFIG = (
    '{ "version":"2", "credentials": {"accessKeyId":"accessfoo", '
    '"secretAccessKey":"secretfoo", "region":"us-east-1"}, '
    '"mongoLogger":{"addr":"127.0.0.1:3543", "db":"foodb", '
    '"collection":"foo"}, "syslogLogger":{"network":"127.0.0.1:543", '
    '"addr":"addr"}, "fileLogger":{"filename":"log.out"}}'
)

LEGACY_CONFIG = (
    '{ "version":"1", "accessKeyId":"abcde", "secretAccessKey":"abcdefgh"}'
)


def _credential(config_file: Path) -> tuple[str, str]:
    document = orjson.loads(config_file.read_bytes())
    return (
        document["credential"]["accessKey"],
        document["credential"]["secretKey"],
    )


def _version(config_file: Path) -> str:
    return orjson.loads(config_file.read_bytes())["version"]


class TestScenarios:
    """End-to-end startup scenarios."""

    def test_legacy_file_only(self, config_dir: Path, store: ConfigStore):
        """Legacy credentials are folded, migrated and the file removed."""
        store.paths.legacy_file.write_text(LEGACY_CONFIG)

        result = migrate_config(config_dir)

        assert not store.paths.legacy_file.exists()
        assert _version(store.paths.config_file) == LATEST_CONFIG_VERSION
        assert _credential(store.paths.config_file) == ("abcde", "abcdefgh")
        assert result.initial_version == "1"
        assert result.final_version == LATEST_CONFIG_VERSION
        assert result.legacy_purged is True
        assert len(result.steps_applied) == 10

    def test_v2_config(self, config_dir: Path, store: ConfigStore):
        """A version 2 document reaches the latest version intact."""
        store.paths.config_file.write_text(V2_CONFIG)

        result = migrate_config(config_dir)

        assert _version(store.paths.config_file) == LATEST_CONFIG_VERSION
        assert _credential(store.paths.config_file) == (
            "accessfoo",
            "secretfoo",
        )
        assert result.initial_version == "2"
        assert result.migrated is True
        assert result.legacy_purged is False

    def test_truncated_config(self, config_dir: Path, store: ConfigStore):
        """A corrupted document aborts migration and stays untouched."""
        store.paths.config_file.write_text('{ "version":"2",')

        with pytest.raises(ConfigParseError):
            migrate_config(config_dir)

        assert store.paths.config_file.read_text() == '{ "version":"2",'
        assert list(config_dir.iterdir()) == [store.paths.config_file]

    def test_fresh_install(self, config_dir: Path):
        """No files: success and nothing is created."""
        result = migrate_config(config_dir)

        assert list(config_dir.iterdir()) == []
        assert result.initial_version is None
        assert result.final_version is None
        assert result.migrated is False

    def test_missing_config_directory(self, tmp_path: Path):
        """A directory that does not exist yet is a fresh install too."""
        config_dir = tmp_path / "never-created"

        migrate_config(config_dir)

        assert not config_dir.exists()


class TestIdempotence:
    """Repeated runs against current documents."""

    def test_latest_is_noop_twice(self, config_dir: Path, store: ConfigStore):
        """Two runs at the latest version change nothing."""
        store.paths.config_file.write_text(V2_CONFIG)
        migrate_config(config_dir)
        migrated = store.paths.config_file.read_bytes()

        for _ in range(2):
            result = migrate_config(config_dir)
            assert result.migrated is False
            assert result.final_version == LATEST_CONFIG_VERSION
            assert store.paths.config_file.read_bytes() == migrated


class TestLegacyRecovery:
    """Legacy artifact edge cases."""

    def test_both_files_present(self, store: ConfigStore, write_json):
        """A crash between save and purge leaves both files behind."""
        store.paths.legacy_file.write_text(LEGACY_CONFIG)
        write_json(
            store.paths.config_file,
            {
                "version": "4",
                "credential": {"accessKey": "keep", "secretKey": "me"},
                "region": "us-east-1",
            },
        )

        result = MigrationDriver(store).run()

        assert not store.paths.legacy_file.exists()
        assert result.legacy_purged is True
        assert result.initial_version == "4"
        assert _version(store.paths.config_file) == LATEST_CONFIG_VERSION
        assert _credential(store.paths.config_file) == ("keep", "me")

    @pytest.mark.parametrize(
        "config_content",
        [
            '{ "version":"2",',
            '{"version":"99"}',
            '{"version":"6", "credential": {"accessKey": "a"}}',
        ],
        ids=["truncated", "unknown-version", "off-schema"],
    )
    def test_both_files_present_with_bad_config_keeps_legacy(
        self, store: ConfigStore, config_content: str
    ):
        """A bad config.json must not cost the legacy credentials."""
        store.paths.legacy_file.write_text(LEGACY_CONFIG)
        store.paths.config_file.write_text(config_content)

        with pytest.raises(ConfigMigrationError):
            MigrationDriver(store).run()

        assert store.paths.legacy_file.read_text() == LEGACY_CONFIG
        assert store.paths.config_file.read_text() == config_content

    def test_both_files_present_legacy_kept_until_steps_finish(
        self, store: ConfigStore, monkeypatch: pytest.MonkeyPatch
    ):
        """A step failing part way leaves the legacy file for the rerun."""
        store.paths.legacy_file.write_text(LEGACY_CONFIG)
        store.paths.config_file.write_text(V2_CONFIG)
        original_save = store.save
        saved: list[Path] = []

        def flaky_save(path: Path, data: bytes) -> None:
            if len(saved) == 2:
                raise ConfigIOError("disk full", target=str(path))
            saved.append(path)
            original_save(path, data)

        monkeypatch.setattr(store, "save", flaky_save)

        with pytest.raises(ConfigIOError):
            MigrationDriver(store).run()

        assert store.paths.legacy_file.exists()

        monkeypatch.undo()
        result = MigrationDriver(store).run()

        assert result.legacy_purged is True
        assert not store.paths.legacy_file.exists()
        assert _version(store.paths.config_file) == LATEST_CONFIG_VERSION

    def test_corrupted_legacy_file(self, store: ConfigStore):
        """A broken legacy file aborts with no write and no delete."""
        store.paths.legacy_file.write_text('{ "version":"1", "accessKeyId"')

        with pytest.raises(ConfigParseError):
            MigrationDriver(store).run()

        assert store.paths.legacy_file.exists()
        assert not store.paths.config_file.exists()

    def test_legacy_file_with_wrong_version(self, store: ConfigStore):
        """A legacy file must declare version 1."""
        store.paths.legacy_file.write_text(
            '{"version":"3", "accessKeyId":"a", "secretAccessKey":"s"}'
        )

        with pytest.raises(UnsupportedConfigVersionError) as exc_info:
            MigrationDriver(store).run()

        assert exc_info.value.phase == "legacy migration"
        assert store.paths.legacy_file.exists()
        assert not store.paths.config_file.exists()


class TestFailures:
    """Aborted migrations and unsupported versions."""

    @pytest.mark.parametrize("version", ["1", "0", "12", "2.0", "latest"])
    def test_unsupported_version(
        self, store: ConfigStore, version: str, write_json
    ):
        """Unknown tags in config.json are rejected without writes."""
        write_json(store.paths.config_file, {"version": version})
        before = store.paths.config_file.read_bytes()

        with pytest.raises(UnsupportedConfigVersionError) as exc_info:
            MigrationDriver(store).run()

        assert exc_info.value.target == str(store.paths.config_file)
        assert store.paths.config_file.read_bytes() == before

    def test_failed_step_keeps_progress(
        self, store: ConfigStore, monkeypatch: pytest.MonkeyPatch
    ):
        """A failing step leaves the last written version for a rerun."""
        store.paths.config_file.write_text(V2_CONFIG)
        original_save = store.save
        saved: list[Path] = []

        def flaky_save(path: Path, data: bytes) -> None:
            if len(saved) == 3:
                raise ConfigIOError("disk full", target=str(path))
            saved.append(path)
            original_save(path, data)

        monkeypatch.setattr(store, "save", flaky_save)

        with pytest.raises(ConfigIOError, match="disk full"):
            MigrationDriver(store).run()

        assert _version(store.paths.config_file) == "5"

        monkeypatch.undo()
        result = MigrationDriver(store).run()

        assert result.initial_version == "5"
        assert _version(store.paths.config_file) == LATEST_CONFIG_VERSION
        assert _credential(store.paths.config_file) == (
            "accessfoo",
            "secretfoo",
        )

    def test_schema_error_mid_chain_names_phase(
        self, store: ConfigStore, write_json
    ):
        """A document failing its step schema reports the step."""
        write_json(
            store.paths.config_file,
            {"version": "6", "credential": {"accessKey": "a"}},
        )

        with pytest.raises(ConfigParseError) as exc_info:
            MigrationDriver(store).run()

        assert exc_info.value.phase == "migrate 6 -> 7"
        assert "migrate 6 -> 7" in str(exc_info.value)
