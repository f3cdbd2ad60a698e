"""CLI package for pkgmerge.

This package contains the Typer application and all subcommands.
"""

from pkgmerge.cli.main import app

__all__ = ["app"]
