"""Configuration models.

Configuration is assembled in two phases. The CLI and the computed
defaults are merged first into a PartialConfig, whose scalar fields
remember which tier supplied them. The dotrc can only be located once a
dotfiles path is known, so it is merged afterwards: a CLI value always
survives, a default value yields to the dotrc.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Generic, TypeVar

from dotman.models.item import AbsolutePath
from dotman.models.platform import Platform

if TYPE_CHECKING:
    from dotman.config.cli import CliConfig
    from dotman.config.defaults import DefaultConfig

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class FromCli(Generic[T]):
    """A value supplied on the command line."""

    value: T


@dataclass(frozen=True, slots=True)
class FromDefault(Generic[T]):
    """A value computed as a fallback."""

    value: T


def from_cli_or_default(cli: T | None, default: T) -> FromCli[T] | FromDefault[T]:
    """Pick the CLI value if present, else the default, tagging the result."""
    if cli is not None:
        return FromCli(cli)
    return FromDefault(default)


def prefer_dotrc(partial: FromCli[T] | FromDefault[T], dotrc: T | None) -> T:
    """Resolve a tagged value against the dotrc.

    CLI values always win; a default only survives when the dotrc does
    not set the field.
    """
    if isinstance(partial, FromCli):
        return partial.value
    if dotrc is not None:
        return dotrc
    return partial.value


class CommandKind(str, Enum):
    """Actions the CLI can perform."""

    LS = "ls"
    LINK = "link"


@dataclass(frozen=True, slots=True)
class Command:
    """The action requested on the command line.

    Attributes:
        kind: Which subcommand was invoked.
        dry_run: For ``link``, skip filesystem changes.
    """

    kind: CommandKind = CommandKind.LS
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class Config:
    """Final, immutable configuration for a run.

    Attributes:
        excludes: Excluded paths, all under dotfiles_path, without duplicates.
        tags: Enabled tags in the order they were given.
        dotfiles_path: Root of the dotfiles tree.
        hostname: Host name selecting the ``host-`` directory.
        platform: Platform selecting the ``platform-`` directories.
        command: Requested action.
        verbose: Whether verbose notices are shown.
    """

    excludes: tuple[AbsolutePath, ...]
    tags: tuple[str, ...]
    dotfiles_path: AbsolutePath
    hostname: str
    platform: Platform
    command: Command = field(default_factory=Command)
    verbose: bool = False


@dataclass(frozen=True, slots=True)
class PartialConfig:
    """CLI and default configuration, before the dotrc is known.

    Excludes are still the raw patterns; they are expanded against the
    dotfiles tree when a Config is built from them.
    """

    excludes: tuple[str, ...]
    tags: tuple[str, ...]
    dotfiles_path: FromCli[Path] | FromDefault[Path]
    hostname: FromCli[str] | FromDefault[str]
    platform: FromCli[Platform] | FromDefault[Platform]
    command: Command
    verbose: bool

    @classmethod
    def merge(cls, cli: CliConfig, default: DefaultConfig) -> PartialConfig:
        """Combine CLI options and defaults.

        Scalar fields take the CLI value when given, else the default.
        Excludes and tags are concatenated, CLI entries first.
        """
        return cls(
            excludes=(*cli.excludes, *default.excludes),
            tags=(*cli.tags, *default.tags),
            dotfiles_path=from_cli_or_default(cli.dotfiles_path, default.dotfiles_path),
            hostname=from_cli_or_default(cli.hostname, default.hostname),
            platform=from_cli_or_default(cli.platform, default.platform),
            command=cli.command,
            verbose=cli.verbose or default.verbose,
        )
