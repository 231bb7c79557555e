"""Symlink creation.

Links resolved items into the home directory. Existing destinations are
never replaced without confirmation, and directories are never replaced
at all: dotman only links files, so a directory in the way has to be
removed by hand.
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path

from dotman.core.errors import DotmanError
from dotman.filesystem.models import LinkResult, LinkStatus
from dotman.models.item import AbsolutePath, Item

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


class LinkError(DotmanError):
    """Base exception for linking errors."""


class LinkIOError(LinkError):
    """Raised when a symlink cannot be created or replaced."""

    def __init__(self, error: OSError) -> None:
        self.error = error
        super().__init__(f"error creating symlinks ({error})")


class DirectoryOverwriteError(LinkError):
    """Raised when a directory stands where a symlink should go."""

    def __init__(self, dest: AbsolutePath) -> None:
        self.dest = dest
        super().__init__(
            f"won't delete directory {dest}. Please remove it manually if you want."
        )


class Linker:
    """Creates symlinks for resolved items.

    Attributes:
        _dry_run: If True, prompt as usual but leave the filesystem untouched.
        _confirm: Asks the user whether an existing destination may go.
    """

    def __init__(self, confirm: Confirm, dry_run: bool = False) -> None:
        """Initialize the Linker.

        Args:
            confirm: Callback receiving a question, returning the answer.
            dry_run: If True, report what would change without changing it.
        """
        self._confirm = confirm
        self._dry_run = dry_run

    def link(self, items: list[Item]) -> list[LinkResult]:
        """Link every item, in order.

        Args:
            items: Items to link.

        Returns:
            One LinkResult per item.

        Raises:
            DirectoryOverwriteError: If a destination is a directory the
                user agreed to overwrite.
            LinkIOError: If the filesystem refuses a change.
        """
        try:
            return [self._link_single(item) for item in items]
        except OSError as e:
            raise LinkIOError(e) from e

    def _link_single(self, item: Item) -> LinkResult:
        """Link one item, prompting if its destination is taken."""
        source, dest = item.source.path, item.dest.path

        if not os.path.lexists(dest):
            self._create(item)
            status = LinkStatus.CREATED_DRYRUN if self._dry_run else LinkStatus.CREATED
            return LinkResult(item=item, status=status)

        if dest.is_symlink() and Path(os.readlink(dest)) == source:
            logger.info("Skipping identical %s", item.dest)
            return LinkResult(item=item, status=LinkStatus.UNCHANGED)

        if not self._confirm(f"Overwrite {item.dest}?"):
            logger.info("Skipping %s", item.dest)
            return LinkResult(item=item, status=LinkStatus.SKIPPED)

        if dest.is_dir() and not dest.is_symlink():
            raise DirectoryOverwriteError(item.dest)

        if not self._dry_run:
            dest.unlink()
        self._create(item)
        status = LinkStatus.OVERWRITTEN_DRYRUN if self._dry_run else LinkStatus.OVERWRITTEN
        return LinkResult(item=item, status=status)

    def _create(self, item: Item) -> None:
        logger.info("Linking %s -> %s", item.source, item.dest)
        if self._dry_run:
            return
        item.dest.path.parent.mkdir(parents=True, exist_ok=True)
        item.dest.path.symlink_to(item.source.path)
