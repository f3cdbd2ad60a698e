"""CLI commands for pkgmerge.

This package contains all subcommand implementations.
"""

from pkgmerge.cli.commands import config, show

__all__ = ["config", "show"]
