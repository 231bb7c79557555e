"""Unit tests for linking domain models."""

import pytest
from dotman.filesystem.models import LinkResult, LinkStatus
from dotman.models.item import Item


@pytest.mark.parametrize(
    ("status", "changed"),
    [
        (LinkStatus.CREATED, True),
        (LinkStatus.OVERWRITTEN, True),
        (LinkStatus.CREATED_DRYRUN, True),
        (LinkStatus.OVERWRITTEN_DRYRUN, True),
        (LinkStatus.UNCHANGED, False),
        (LinkStatus.SKIPPED, False),
    ],
)
def test_changed(status: LinkStatus, changed: bool) -> None:
    """Only created or replaced destinations count as changes."""
    result = LinkResult(item=Item.of("/dots/a", "/home/u/.a"), status=status)

    assert result.changed is changed
