"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from dotman import __version__
from dotman.cli.commands import link, ls
from dotman.cli.options import (
    DotfilesPathOption,
    ExcludeOption,
    HostnameOption,
    PlatformOption,
    TagOption,
    VerboseOption,
    shared_options,
)

# Create main Typer app
app = typer.Typer(
    name="dot",
    help="Link the files of a dotfiles repository into your home directory.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dotman version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: VerboseOption = False,
    excludes: ExcludeOption = None,
    tags: TagOption = None,
    dotfiles_path: DotfilesPathOption = None,
    hostname: HostnameOption = None,
    platform: PlatformOption = None,
) -> None:
    """dotman - dotfile management.

    Ordinary folders in your dotfiles folder are always linked. Folders
    named host-<hostname>, tag-<tag> and platform-<platform> are only
    linked when they match the current host, an enabled tag, or the
    current platform.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["options"] = shared_options(verbose, excludes, tags, dotfiles_path, hostname, platform)


# Register commands
app.add_typer(ls.app, name="ls")
app.add_typer(link.app, name="link")


if __name__ == "__main__":
    app()
