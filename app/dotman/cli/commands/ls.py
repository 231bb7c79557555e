"""List command.

Shows every active dotfile and where it is (or would be) linked.
"""

import typer

from dotman.cli.display import FormattedItems, print_items
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
from dotman.utils.formatting import print_info

app = typer.Typer(
    help="List the active dotfiles.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_items(
    ctx: typer.Context,
    verbose: VerboseOption = False,
    excludes: ExcludeOption = None,
    tags: TagOption = None,
    dotfiles_path: DotfilesPathOption = None,
    hostname: HostnameOption = None,
    platform: PlatformOption = None,
) -> None:
    """List the active dotfiles.

    Examples:
        dot ls
        dot ls --tag vim --exclude 'secrets/*'
    """
    sub = shared_options(verbose, excludes, tags, dotfiles_path, hostname, platform)
    cli = get_cli_config(ctx, sub, Command(kind=CommandKind.LS))
    _, items = load_items(cli)

    if not items:
        print_info("No active dotfiles found.")
        return

    print_items(FormattedItems.from_items(items))
