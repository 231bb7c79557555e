"""CLI package for dotman.

This package contains the Typer application and all subcommands.
"""

from dotman.cli.main import app

__all__ = ["app"]
