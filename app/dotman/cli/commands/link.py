"""Link command.

Symlinks every active dotfile into the home directory, asking before
anything already in place is replaced.
"""

from typing import Annotated

import typer

from dotman.cli.display import FormattedItems, create_results_table, print_results_summary
from dotman.cli.options import (
    DotfilesPathOption,
    ExcludeOption,
    HostnameOption,
    PlatformOption,
    TagOption,
    VerboseOption,
    get_cli_config,
    load_items,
    shared_options,
)
from dotman.config.models import Command, CommandKind
from dotman.filesystem.linker import Linker, LinkError
from dotman.utils.formatting import console, print_error, print_info


def confirm_overwrite(question: str) -> bool:
    """Ask the user whether an existing destination may be replaced."""
    return typer.confirm(question, default=False)


app = typer.Typer(
    help="Link all active dotfiles.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def link_items(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Skip the actual linking. Errors and prompts are unchanged.",
        ),
    ] = False,
    verbose: VerboseOption = False,
    excludes: ExcludeOption = None,
    tags: TagOption = None,
    dotfiles_path: DotfilesPathOption = None,
    hostname: HostnameOption = None,
    platform: PlatformOption = None,
) -> None:
    """Link all active dotfiles.

    Examples:
        dot link --dry-run      # Preview changes
        dot link -t work        # Include tag-work/
    """
    sub = shared_options(verbose, excludes, tags, dotfiles_path, hostname, platform)
    cli = get_cli_config(ctx, sub, Command(kind=CommandKind.LINK, dry_run=dry_run))
    config, items = load_items(cli)

    if not items:
        print_info("No active dotfiles found.")
        return

    linker = Linker(confirm=confirm_overwrite, dry_run=config.command.dry_run)
    try:
        results = linker.link(FormattedItems.from_items(items).items)
    except LinkError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if any(r.changed for r in results):
        console.print(create_results_table(results, dry_run=config.command.dry_run))
    print_results_summary(results, dry_run=config.command.dry_run)
