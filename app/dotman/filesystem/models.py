"""Linking domain models.

This module defines the outcome of linking a single item.
"""

from dataclasses import dataclass
from enum import Enum

from dotman.models.item import Item


class LinkStatus(str, Enum):
    """Outcome of linking a single item.

    Attributes:
        CREATED: Symlink created where nothing existed.
        OVERWRITTEN: Existing file or symlink replaced after confirmation.
        UNCHANGED: Destination already links to the source.
        SKIPPED: User declined to overwrite the destination.
        CREATED_DRYRUN: Symlink would have been created.
        OVERWRITTEN_DRYRUN: Destination would have been replaced.
    """

    CREATED = "created"
    OVERWRITTEN = "overwritten"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    CREATED_DRYRUN = "created (dry-run)"
    OVERWRITTEN_DRYRUN = "overwritten (dry-run)"


@dataclass(frozen=True, slots=True)
class LinkResult:
    """Result of linking a single item.

    Attributes:
        item: The item that was processed.
        status: What happened to its destination.
    """

    item: Item
    status: LinkStatus

    @property
    def changed(self) -> bool:
        """Whether the destination was (or would have been) modified."""
        return self.status not in (LinkStatus.UNCHANGED, LinkStatus.SKIPPED)
