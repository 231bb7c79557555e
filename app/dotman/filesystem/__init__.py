"""Dotfile resolution and linking.

This module walks the dotfiles tree to find the active items and links
them into the home directory.
"""

from dotman.filesystem.linker import DirectoryOverwriteError, Linker, LinkError, LinkIOError
from dotman.filesystem.models import LinkResult, LinkStatus
from dotman.filesystem.resolver import (
    DuplicateFilesError,
    ResolverError,
    ResolverIOError,
    collect_items,
    resolve_items,
)

__all__ = [
    "DirectoryOverwriteError",
    "DuplicateFilesError",
    "LinkError",
    "LinkIOError",
    "LinkResult",
    "LinkStatus",
    "Linker",
    "ResolverError",
    "ResolverIOError",
    "collect_items",
    "resolve_items",
]
