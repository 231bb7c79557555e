"""Dotfile resolution.

Walks the dotfiles tree and decides which files are linked into the
home directory, and where.

Top-level entries of the dotfiles folder are handled as follows:

- hidden and excluded entries are skipped,
- ``host-``, ``tag-`` and ``platform-`` directories are entered only when
  active, and their entries are handled by these same rules,
- anything else is descended fully: every non-hidden, non-excluded
  regular file beneath it becomes an item.

A fully descended entry named ``editor`` maps ``editor/init`` to
``~/.editor/init``; a top-level file ``init`` maps to ``~/.init``.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from dotman.config.models import Config
from dotman.core.errors import DotmanError
from dotman.core.paths import get_home_dir
from dotman.models.item import AbsolutePath, Item

logger = logging.getLogger(__name__)

HOST_PREFIX = "host-"
TAG_PREFIX = "tag-"
PLATFORM_PREFIX = "platform-"
PREFIXES: tuple[str, ...] = (HOST_PREFIX, TAG_PREFIX, PLATFORM_PREFIX)


class ResolverError(DotmanError):
    """Base exception for dotfile resolution errors."""


class DuplicateFilesError(ResolverError):
    """Raised when several active source files map to one destination."""

    def __init__(self, dest: AbsolutePath) -> None:
        self.dest = dest
        super().__init__(f"multiple source files for destination {dest}")


class ResolverIOError(ResolverError):
    """Raised when the dotfiles tree cannot be read."""

    def __init__(self, error: OSError) -> None:
        self.error = error
        super().__init__(f"error reading from dotfiles directory ({error})")


def is_hidden(name: str) -> bool:
    """Check whether a file name is hidden."""
    return name.startswith(".")


def is_prefixed(name: str) -> bool:
    """Check whether a directory name carries a selection prefix."""
    return name.startswith(PREFIXES)


def active_prefixed_names(config: Config) -> frozenset[str]:
    """Names of the prefixed directories selected by a configuration.

    Args:
        config: Configuration supplying hostname, tags and platform.

    Returns:
        Set of directory names such as ``host-laptop``, ``tag-vim`` and
        ``platform-mac``.
    """
    names = {HOST_PREFIX + config.hostname}
    names.update(TAG_PREFIX + tag for tag in config.tags)
    names.update(PLATFORM_PREFIX + alias for alias in config.platform.aliases)
    return frozenset(names)


def collect_items(config: Config) -> list[Item]:
    """Walk the dotfiles tree and collect every active item.

    Destinations are not checked for collisions; see resolve_items.

    Args:
        config: Configuration to resolve against.

    Returns:
        Items in filesystem order.

    Raises:
        ResolverIOError: If part of the tree cannot be read.
    """
    home = get_home_dir()
    active = active_prefixed_names(config)
    excludes = frozenset(config.excludes)
    try:
        return list(_find_items(config.dotfiles_path, active, excludes, home))
    except OSError as e:
        raise ResolverIOError(e) from e


def resolve_items(config: Config) -> list[Item]:
    """Resolve the definitive list of items for a configuration.

    Args:
        config: Configuration to resolve against.

    Returns:
        Items with pairwise distinct destinations, in unspecified order.

    Raises:
        DuplicateFilesError: If two sources map to the same destination.
        ResolverIOError: If part of the tree cannot be read.
    """
    items = collect_items(config)
    check_duplicates(items)
    return items


def check_duplicates(items: list[Item]) -> None:
    """Ensure no two items share a destination.

    Raises:
        DuplicateFilesError: Naming the first repeated destination.
    """
    seen: set[AbsolutePath] = set()
    for item in items:
        if item.dest in seen:
            raise DuplicateFilesError(item.dest)
        seen.add(item.dest)


def _find_items(
    root: AbsolutePath,
    active: frozenset[str],
    excludes: frozenset[AbsolutePath],
    home: Path,
) -> Iterator[Item]:
    """Yield items below a dotfiles root or an active prefixed directory."""
    with os.scandir(root) as it:
        entries = list(it)

    for entry in entries:
        path = AbsolutePath(Path(entry.path))

        if is_hidden(entry.name):
            continue
        if path in excludes:
            logger.info("Excluded %s", path)
            continue

        if is_prefixed(entry.name):
            if entry.name in active and entry.is_dir():
                yield from _find_items(path, active, excludes, home)
            continue

        yield from _link_dir_contents(path, excludes, home)


def _link_dir_contents(
    top: AbsolutePath,
    excludes: frozenset[AbsolutePath],
    home: Path,
) -> Iterator[Item]:
    """Yield every non-hidden, non-excluded regular file under ``top``.

    ``top`` itself is exempt from the hidden check and may be a file.
    """
    base = top.path.parent

    def make_item(path: Path) -> Item:
        tail = path.relative_to(base)
        return Item(source=AbsolutePath(path), dest=AbsolutePath(home / ("." + str(tail))))

    if not top.path.is_dir():
        if top.path.is_file():
            yield make_item(top.path)
        return

    stack = [top.path]
    while stack:
        directory = stack.pop()
        with os.scandir(directory) as it:
            entries = list(it)

        for entry in entries:
            if is_hidden(entry.name):
                continue
            path = Path(entry.path)
            if AbsolutePath(path) in excludes:
                logger.info("Excluded %s", AbsolutePath(path))
                continue
            if entry.is_dir(follow_symlinks=False):
                stack.append(path)
            elif entry.is_file(follow_symlinks=False):
                yield make_item(path)
