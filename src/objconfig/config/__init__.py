"""Configuration storage for objconfig.

- paths: ConfigPaths value naming the legacy and unified files
- store: ConfigStore with atomic save and idempotent purge
- schemas: JSON Schema validation of stored documents
"""

from objconfig.config.paths import ConfigPaths
from objconfig.config.store import ConfigStore

__all__ = ["ConfigPaths", "ConfigStore"]
