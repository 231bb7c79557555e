"""Display helpers for items and link results.

Items are listed as aligned ``source  ->    dest`` lines so the output
stays readable when piped; link results use a Rich table.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from rich.table import Table
from rich.text import Text

from dotman.filesystem.models import LinkResult, LinkStatus
from dotman.models.item import Item
from dotman.utils.formatting import console, print_info, print_success

ARROW = "  ->    "


@dataclass(frozen=True, slots=True)
class FormattedItem:
    """An item padded to a shared source column width."""

    item: Item
    width: int

    def __str__(self) -> str:
        return f"{str(self.item.source):<{self.width}}{ARROW}{self.item.dest}"

    def to_text(self) -> Text:
        """Render the line with theme styles."""
        text = Text()
        text.append(f"{str(self.item.source):<{self.width}}", style="item.source")
        text.append(ARROW, style="muted")
        text.append(str(self.item.dest), style="item.dest")
        return text


class FormattedItems:
    """A group of items formatted with uniform column widths.

    Items are sorted by source so listings are stable across runs, since
    resolution order depends on the filesystem.
    """

    def __init__(self, formatted_items: list[FormattedItem]) -> None:
        self._formatted_items = formatted_items

    @classmethod
    def from_items(cls, items: list[Item]) -> "FormattedItems":
        """Create FormattedItems from a collection of items."""
        width = max((len(str(item.source)) for item in items), default=0)
        ordered = sorted(items, key=lambda item: item.source)
        return cls([FormattedItem(item=item, width=width) for item in ordered])

    def __iter__(self) -> Iterator[FormattedItem]:
        return iter(self._formatted_items)

    def __len__(self) -> int:
        return len(self._formatted_items)

    def __str__(self) -> str:
        return "\n".join(str(formatted) for formatted in self._formatted_items)

    @property
    def items(self) -> list[Item]:
        """The underlying items, in display order."""
        return [formatted.item for formatted in self._formatted_items]


def print_items(items: FormattedItems) -> None:
    """Print aligned item lines."""
    for formatted in items:
        console.print(formatted.to_text(), soft_wrap=True)


_STATUS_MARKUP: dict[LinkStatus, str] = {
    LinkStatus.CREATED: "[link.created]created[/]",
    LinkStatus.CREATED_DRYRUN: "[info]would create[/]",
    LinkStatus.OVERWRITTEN: "[link.overwritten]overwritten[/]",
    LinkStatus.OVERWRITTEN_DRYRUN: "[info]would overwrite[/]",
    LinkStatus.UNCHANGED: "[muted]unchanged[/]",
    LinkStatus.SKIPPED: "[warning]skipped[/]",
}


def create_results_table(results: list[LinkResult], dry_run: bool = False) -> Table:
    """Create a Rich table displaying link results.

    Unchanged destinations are left out to keep repeated runs quiet.

    Args:
        results: Link results to display.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Link Results (Dry Run)" if dry_run else "Link Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", no_wrap=True)
    table.add_column("Destination", no_wrap=True, style="item.dest")
    table.add_column("Source", style="item.source")

    for result in results:
        if result.status == LinkStatus.UNCHANGED:
            continue
        table.add_row(
            _STATUS_MARKUP[result.status],
            str(result.item.dest),
            str(result.item.source),
        )

    return table


def print_results_summary(results: list[LinkResult], dry_run: bool = False) -> None:
    """Print a summary of link results.

    Args:
        results: Link results.
        dry_run: Whether this was a dry-run.
    """
    changed = sum(1 for r in results if r.changed)
    unchanged = sum(1 for r in results if r.status == LinkStatus.UNCHANGED)
    skipped = sum(1 for r in results if r.status == LinkStatus.SKIPPED)

    if dry_run:
        print_info(f"Dry-run: {changed} link(s) would be created or replaced.")
    elif changed:
        print_success(f"{changed} link(s) created or replaced.")
    else:
        print_success("All dotfiles are already linked.")

    if unchanged or skipped:
        console.print(f"[muted]{unchanged} unchanged, {skipped} skipped[/muted]")
