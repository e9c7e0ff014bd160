"""The ten configuration migration steps, version 1 through 11.

Field mappings per step:
    1 -> 2   legacy fsUsers.json folded into config.json, legacy file purged
    2 -> 3   credentials renamed to credential, region lifted to top level,
             loggers rebuilt as logger.console/file/syslog, mongo dropped
    3 -> 4   address removed
    4 -> 5   disabled amqp/elasticsearch/redis logger targets added
    5 -> 6   amqp/elasticsearch/redis moved from logger to notify
    6 -> 7   every notify kind gets a default target "1"
    7 -> 8   notify.nats added
    8 -> 9   notify.postgresql added
    9 -> 10  logger.syslog removed
    10 -> 11 notify.kafka added

Credential values are moved between containers but never rewritten.
"""

import copy
from pathlib import Path
from typing import Any

from objconfig.config.paths import ConfigPaths
from objconfig.config.schemas import CONFIG_V2_SCHEMA, LEGACY_V1_SCHEMA
from objconfig.config.store import ConfigStore
from objconfig.constants import (
    DEFAULT_ADDRESS,
    DEFAULT_CONSOLE_LOGGER_LEVEL,
    DEFAULT_FILE_LOGGER_LEVEL,
    DEFAULT_NOTIFY_TARGET_ID,
    DEFAULT_REGION,
    DEFAULT_SYSLOG_LOGGER_LEVEL,
    DEFAULT_TARGET_LOGGER_LEVEL,
    FIRST_UNIFIED_CONFIG_VERSION,
    LEGACY_CONFIG_VERSION,
)
from objconfig.logger import get_logger
from objconfig.migration.base import Migrator

logger = get_logger(__name__)

# Settings of a disabled notification target, per target kind
NOTIFY_TARGET_DEFAULTS: dict[str, dict[str, Any]] = {
    "amqp": {
        "url": "",
        "exchange": "",
        "routingKey": "",
        "exchangeType": "",
        "mandatory": False,
        "immediate": False,
        "durable": False,
        "internal": False,
        "noWait": False,
        "autoDeleted": False,
    },
    "elasticsearch": {"url": "", "index": ""},
    "redis": {"address": "", "password": "", "key": ""},
    "nats": {
        "address": "",
        "subject": "",
        "username": "",
        "password": "",
        "token": "",
        "secure": False,
        "pingInterval": 0,
    },
    "postgresql": {
        "connectionString": "",
        "table": "",
        "host": "",
        "port": "",
        "user": "",
        "password": "",
        "database": "",
    },
    "kafka": {"brokers": [], "topic": ""},
}

# Targets that started out as logger backends in version 5
LOGGER_TARGET_KINDS = ("amqp", "elasticsearch", "redis")


def default_target(kind: str) -> dict[str, Any]:
    """Return a fresh disabled target of the given kind."""
    return {"enable": False, **copy.deepcopy(NOTIFY_TARGET_DEFAULTS[kind])}


def _ensure_default_target(document: dict[str, Any], kind: str) -> None:
    """Give ``notify.<kind>`` a disabled target "1" unless it has targets."""
    targets = document.setdefault("notify", {}).setdefault(kind, {})
    if not targets:
        targets[DEFAULT_NOTIFY_TARGET_ID] = default_target(kind)


class LegacyCredentialMigrator(Migrator):
    """Fold the version-1 credential file into a version-2 config.json."""

    source_version = LEGACY_CONFIG_VERSION
    target_version = FIRST_UNIFIED_CONFIG_VERSION
    schema_name = LEGACY_V1_SCHEMA

    def source_path(self, paths: ConfigPaths) -> Path:
        return paths.legacy_file

    def transform(self, document: dict[str, Any]) -> dict[str, Any]:
        return {
            "credentials": {
                "accessKeyId": document["accessKeyId"],
                "secretAccessKey": document["secretAccessKey"],
                "region": DEFAULT_REGION,
            },
        }

    def after_save(self, store: ConfigStore, source: Path) -> None:
        # config.json is durable at this point
        store.purge(source)
        logger.info("Removed legacy credential file %s", source)


class V2ToV3Migrator(Migrator):
    """Rename credentials and rebuild the logger section."""

    source_version = FIRST_UNIFIED_CONFIG_VERSION
    target_version = "3"
    schema_name = CONFIG_V2_SCHEMA

    def transform(self, document: dict[str, Any]) -> dict[str, Any]:
        credentials = document.pop("credentials")
        file_logger = document.pop("fileLogger", {})
        syslog_logger = document.pop("syslogLogger", {})
        # Version 3 has no mongo backend
        if document.pop("mongoLogger", None):
            logger.warning("Dropping mongoLogger settings, not supported")

        filename = file_logger.get("filename", "")
        network = syslog_logger.get("network", "")

        document["address"] = DEFAULT_ADDRESS
        document["credential"] = {
            "accessKey": credentials["accessKeyId"],
            "secretKey": credentials["secretAccessKey"],
        }
        document["region"] = credentials.get("region") or DEFAULT_REGION
        document["logger"] = {
            "console": {
                "enable": True,
                "level": DEFAULT_CONSOLE_LOGGER_LEVEL,
            },
            "file": {
                "enable": bool(filename),
                "fileName": filename,
                "level": DEFAULT_FILE_LOGGER_LEVEL,
            },
            "syslog": {
                "enable": bool(network),
                "network": network,
                "addr": syslog_logger.get("addr", ""),
                "level": DEFAULT_SYSLOG_LOGGER_LEVEL,
            },
        }
        return document


class V3ToV4Migrator(Migrator):
    """Drop the listen address from the stored config."""

    source_version = "3"
    target_version = "4"

    def transform(self, document: dict[str, Any]) -> dict[str, Any]:
        document.pop("address", None)
        return document


class V4ToV5Migrator(Migrator):
    source_version = "4"
    target_version = "5"

    def transform(self, document: dict[str, Any]) -> dict[str, Any]:
        logger_section = document.setdefault("logger", {})
        for kind in LOGGER_TARGET_KINDS:
            logger_section.setdefault(
                kind,
                {**default_target(kind), "level": DEFAULT_TARGET_LOGGER_LEVEL},
            )
        return document


class V5ToV6Migrator(Migrator):
    """Move event targets out of the logger into the notify section."""

    source_version = "5"
    target_version = "6"

    def transform(self, document: dict[str, Any]) -> dict[str, Any]:
        logger_section = document.setdefault("logger", {})
        notify = document.setdefault("notify", {})
        for kind in LOGGER_TARGET_KINDS:
            entry = logger_section.pop(kind, None)
            if entry is None:
                continue
            target = {k: v for k, v in entry.items() if k != "level"}
            notify.setdefault(kind, {}).setdefault(
                DEFAULT_NOTIFY_TARGET_ID, target
            )
        return document


class V6ToV7Migrator(Migrator):
    source_version = "6"
    target_version = "7"

    def transform(self, document: dict[str, Any]) -> dict[str, Any]:
        for kind in LOGGER_TARGET_KINDS:
            _ensure_default_target(document, kind)
        return document


class V7ToV8Migrator(Migrator):
    source_version = "7"
    target_version = "8"

    def transform(self, document: dict[str, Any]) -> dict[str, Any]:
        _ensure_default_target(document, "nats")
        return document


class V8ToV9Migrator(Migrator):
    source_version = "8"
    target_version = "9"

    def transform(self, document: dict[str, Any]) -> dict[str, Any]:
        _ensure_default_target(document, "postgresql")
        return document


class V9ToV10Migrator(Migrator):
    """Remove the syslog logger backend."""

    source_version = "9"
    target_version = "10"

    def transform(self, document: dict[str, Any]) -> dict[str, Any]:
        logger_section = document.get("logger", {})
        if logger_section.pop("syslog", None):
            logger.info("Removed syslog logger settings")
        return document


class V10ToV11Migrator(Migrator):
    source_version = "10"
    target_version = "11"

    def transform(self, document: dict[str, Any]) -> dict[str, Any]:
        _ensure_default_target(document, "kafka")
        return document


MIGRATORS: tuple[type[Migrator], ...] = (
    LegacyCredentialMigrator,
    V2ToV3Migrator,
    V3ToV4Migrator,
    V4ToV5Migrator,
    V5ToV6Migrator,
    V6ToV7Migrator,
    V7ToV8Migrator,
    V8ToV9Migrator,
    V9ToV10Migrator,
    V10ToV11Migrator,
)
