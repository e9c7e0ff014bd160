"""Top-level package for objconfig.

Persisted configuration migration for an S3-compatible object storage
server.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("objconfig")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"
