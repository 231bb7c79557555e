"""Configuration merging.

Builds the final Config from three sources with the precedence
CLI > dotrc > defaults. Locating the dotrc requires a dotfiles path, so
the CLI and defaults are merged first and the dotrc is applied last.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from dotman.config.cli import CliConfig
from dotman.config.defaults import DefaultConfig
from dotman.config.dotrc import DOTRC_NAMES, DotrcConfig, load_dotrc
from dotman.config.globs import InvalidGlobError, compile_glob
from dotman.config.models import Config, PartialConfig, prefer_dotrc
from dotman.core.errors import DotmanError
from dotman.core.paths import expand_tilde, get_home_dir
from dotman.filesystem.resolver import DuplicateFilesError, collect_items
from dotman.models.item import AbsolutePath
from dotman.models.platform import Platform

logger = logging.getLogger(__name__)


class ExcludeWalkError(DotmanError):
    """Raised when the dotfiles tree cannot be walked to expand excludes."""

    def __init__(self, error: OSError) -> None:
        self.error = error
        super().__init__(f"error reading file or directory ({error})")


def get_config(cli: CliConfig) -> Config:
    """Resolve the configuration for a run.

    Args:
        cli: Options read from the command line.

    Returns:
        The final, immutable configuration.

    Raises:
        DotmanError: On any environment, dotrc, or filesystem error.
    """
    partial = PartialConfig.merge(cli, DefaultConfig.get())
    dotrc_path = find_dotrc(partial)
    if dotrc_path is not None:
        logger.info("Using dotrc %s", AbsolutePath(dotrc_path))
    return merge_dotrc(partial, load_dotrc(dotrc_path))


def find_dotrc(partial: PartialConfig) -> Path | None:
    """Locate the dotrc file using the CLI and default configuration.

    The dotfiles tree is resolved with the partial configuration first, so
    a dotrc may live in an ordinary, ``host-``, ``tag-`` or ``platform-``
    folder. Failing that, the home directory is searched.

    Args:
        partial: Configuration without any dotrc input.

    Returns:
        Path to the dotrc, or None if there is none.

    Raises:
        DuplicateFilesError: If several active dotrc files share a destination.
        ResolverIOError: If the dotfiles tree cannot be read.
        ExcludeWalkError: If excludes cannot be expanded.
    """
    dotfiles_path = partial.dotfiles_path.value
    if dotfiles_path.is_dir():
        items = collect_items(partial_to_config(partial))
        for name in DOTRC_NAMES:
            candidates = [item for item in items if item.dest.name == name]
            if len(candidates) > 1:
                raise DuplicateFilesError(candidates[0].dest)
            if candidates:
                return candidates[0].source.path

    home = get_home_dir()
    for name in DOTRC_NAMES:
        path = home / name
        if path.is_file():
            return path
    return None


def partial_to_config(partial: PartialConfig) -> Config:
    """Build a Config from the partial configuration alone.

    Used for dotrc discovery, where CLI and default excludes and tags are
    already in effect.
    """
    dotfiles_path = AbsolutePath(partial.dotfiles_path.value)
    return Config(
        excludes=expand_excludes(partial.excludes, dotfiles_path),
        tags=partial.tags,
        dotfiles_path=dotfiles_path,
        hostname=partial.hostname.value,
        platform=partial.platform.value,
        command=partial.command,
        verbose=partial.verbose,
    )


def merge_dotrc(partial: PartialConfig, dotrc: DotrcConfig) -> Config:
    """Merge the dotrc into the partial configuration.

    Scalars follow the CLI > dotrc > default hierarchy. Excludes and tags
    from the dotrc are appended to the CLI and default ones.

    Args:
        partial: CLI and default configuration.
        dotrc: Parsed dotrc.

    Returns:
        The final configuration.

    Raises:
        NoHomeDirectoryError: If a ``~`` must be expanded without a home.
        PlatformParseError: If the dotrc names an unknown platform.
        ExcludeWalkError: If excludes cannot be expanded.
    """
    dotrc_dotfiles_path = None
    if dotrc.dotfiles_path is not None:
        dotrc_dotfiles_path = Path(expand_tilde(dotrc.dotfiles_path))
        if not dotrc_dotfiles_path.is_absolute():
            dotrc_dotfiles_path = get_home_dir() / dotrc_dotfiles_path
    dotfiles_path = AbsolutePath(prefer_dotrc(partial.dotfiles_path, dotrc_dotfiles_path))

    dotrc_platform = Platform.parse(dotrc.platform) if dotrc.platform is not None else None

    raw_excludes = (*partial.excludes, *(expand_tilde(e) for e in dotrc.excludes or ()))

    return Config(
        excludes=expand_excludes(raw_excludes, dotfiles_path),
        tags=(*partial.tags, *(dotrc.tags or ())),
        dotfiles_path=dotfiles_path,
        hostname=prefer_dotrc(partial.hostname, dotrc.hostname),
        platform=prefer_dotrc(partial.platform, dotrc_platform),
        command=partial.command,
        verbose=partial.verbose,
    )


def expand_excludes(
    patterns: Iterable[str],
    dotfiles_path: AbsolutePath,
) -> tuple[AbsolutePath, ...]:
    """Glob-expand exclude patterns relative to the dotfiles root.

    Each pattern is matched against the whole path of every entry of the
    tree relative to the root, so ``secrets/*`` matches ``secrets/key``
    but not ``public/secrets/key``, while ``*.swp`` matches swap files in
    any folder. Patterns that are not valid globs are kept as literal
    paths.

    Args:
        patterns: Raw exclude entries.
        dotfiles_path: Root of the dotfiles tree.

    Returns:
        Deduplicated absolute paths under the dotfiles root.

    Raises:
        ExcludeWalkError: If the tree cannot be walked.
    """
    tree: list[str] | None = None
    expanded: set[str] = set()

    for raw in patterns:
        pattern = _relative_pattern(raw, dotfiles_path)
        if pattern is None:
            continue

        try:
            glob = compile_glob(pattern)
        except InvalidGlobError as e:
            logger.info("Not expanding exclude %s (%s)", pattern, e.reason)
            expanded.add(pattern)
            continue

        if tree is None:
            tree = _walk_tree(dotfiles_path)
        matches = [entry for entry in tree if glob.matches(entry)]
        if matches != [pattern]:
            shown = ", ".join(sorted(matches)) or "nothing"
            logger.info("Expanded exclude %s to %s", pattern, shown)
        expanded.update(matches)

    return tuple(sorted(dotfiles_path / entry for entry in expanded))


def _relative_pattern(raw: str, dotfiles_path: AbsolutePath) -> str | None:
    """Normalize an exclude entry to a pattern relative to the root.

    Absolute entries under the root are made relative; absolute entries
    outside of it can never match and are dropped.
    """
    path = Path(raw)
    if not path.is_absolute():
        return path.as_posix()
    try:
        return path.relative_to(dotfiles_path.path).as_posix()
    except ValueError:
        logger.warning("Ignoring exclude %s outside of %s", raw, dotfiles_path)
        return None


def _walk_tree(root: AbsolutePath) -> list[str]:
    """List every entry under root as a relative posix path, following symlinks."""

    def raise_error(error: OSError) -> None:
        raise error

    entries: list[str] = []
    try:
        for dirpath, dirnames, filenames in os.walk(root, onerror=raise_error, followlinks=True):
            relative = Path(dirpath).relative_to(root.path)
            entries.extend((relative / name).as_posix() for name in (*dirnames, *filenames))
    except OSError as e:
        raise ExcludeWalkError(e) from e
    return entries
