"""CLI commands for dotman.

This package contains all subcommand implementations.
"""

from dotman.cli.commands import link, ls

__all__ = ["link", "ls"]
