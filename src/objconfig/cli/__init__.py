"""Command-line interface for objconfig."""

from objconfig.cli.parser import CLIParser
from objconfig.cli.runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]
