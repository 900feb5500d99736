"""CLI entrypoints for the git source extractor."""

from cli.app import main
from cli.exit_codes import ExitCode

__all__ = ["ExitCode", "main"]
