"""Shared options and helpers for CLI commands.

The shared options are declared once here and accepted both by the main
callback and by every subcommand, so ``dot -t vim ls`` and
``dot ls -t vim`` are equivalent.
"""

from pathlib import Path
from typing import Annotated

import typer

from dotman.config.cli import CliConfig, DuplicateOptionError, SharedOptions, single_value
from dotman.config.merge import get_config
from dotman.config.models import Command, Config
from dotman.core.errors import DotmanError
from dotman.filesystem.resolver import resolve_items
from dotman.models.item import Item
from dotman.models.platform import PlatformParseError
from dotman.utils.formatting import configure_logging, print_error

VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose output."),
]
ExcludeOption = Annotated[
    list[str] | None,
    typer.Option(
        "--exclude",
        "-e",
        help=(
            "Path (relative to the dotfiles folder) to exclude, in addition to the "
            "dotrc excludes. Globs are accepted; quote them to stop the shell expanding them."
        ),
    ),
]
TagOption = Annotated[
    list[str] | None,
    typer.Option("--tag", "-t", help="Tag to enable, in addition to the dotrc tags."),
]
DotfilesPathOption = Annotated[
    list[Path] | None,
    typer.Option("--dotfiles-path", help="Folder to search for dotfiles. [default: ~/.dotfiles]"),
]
HostnameOption = Annotated[
    list[str] | None,
    typer.Option("--hostname", help="Hostname to use. [default: system hostname]"),
]
PlatformOption = Annotated[
    list[str] | None,
    typer.Option(
        "--platform",
        help="Platform to use: macos, windows, linux or wsl. [default: detected]",
    ),
]


def shared_options(
    verbose: bool,
    excludes: list[str] | None,
    tags: list[str] | None,
    dotfiles_path: list[Path] | None,
    hostname: list[str] | None,
    platform: list[str] | None,
) -> SharedOptions:
    """Bundle raw option values.

    Raises:
        typer.BadParameter: If a single-valued option is given twice.
    """
    try:
        return SharedOptions(
            verbose=verbose,
            excludes=tuple(excludes or ()),
            tags=tuple(tags or ()),
            dotfiles_path=single_value("dotfiles-path", dotfiles_path),
            hostname=single_value("hostname", hostname),
            platform=single_value("platform", platform),
        )
    except DuplicateOptionError as e:
        raise _duplicate_option(e) from e


def get_cli_config(ctx: typer.Context, sub: SharedOptions, command: Command) -> CliConfig:
    """Merge the main callback's options with a subcommand's.

    Raises:
        typer.BadParameter: If a single-valued option is given twice or
            the platform is not recognized.
    """
    obj = ctx.find_root().obj or {}
    top: SharedOptions = obj.get("options", SharedOptions())
    try:
        return CliConfig.from_options(top, sub, command)
    except DuplicateOptionError as e:
        raise _duplicate_option(e) from e
    except PlatformParseError as e:
        raise typer.BadParameter(str(e), param_hint="'--platform'") from e


def _duplicate_option(error: DuplicateOptionError) -> typer.BadParameter:
    return typer.BadParameter("cannot be used multiple times", param_hint=f"'--{error.option}'")


def load_items(cli: CliConfig) -> tuple[Config, list[Item]]:
    """Resolve the configuration and the active items.

    Any dotman error is reported on stderr and ends the command.

    Raises:
        typer.Exit: With code 1 if configuration or resolution fails.
    """
    configure_logging(cli.verbose)
    try:
        config = get_config(cli)
        return config, resolve_items(config)
    except DotmanError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
