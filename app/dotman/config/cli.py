"""Configuration read from command line arguments.

Shared options may be passed before the subcommand, after it, or both.
Repeatable options accumulate across both positions; single-valued
options must appear once, in only one of them.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from dotman.config.models import Command
from dotman.core.errors import DotmanError
from dotman.models.platform import Platform

T = TypeVar("T")


class DuplicateOptionError(DotmanError):
    """Raised when a single-valued option is given more than once."""

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"the argument '--{option}' cannot be used multiple times")


@dataclass(frozen=True, slots=True)
class SharedOptions:
    """Options accepted both globally and by every subcommand.

    Attributes:
        verbose: Enables verbose output.
        excludes: Paths or globs, relative to the dotfiles folder, to exclude.
        tags: Tags to enable.
        dotfiles_path: Folder in which to search for dotfiles.
        hostname: Hostname to use instead of the system hostname.
        platform: Platform name to use instead of the detected platform.
    """

    verbose: bool = False
    excludes: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    dotfiles_path: Path | None = None
    hostname: str | None = None
    platform: str | None = None


@dataclass(frozen=True, slots=True)
class CliConfig:
    """The portion of the configuration read from CLI arguments.

    Every scalar is None when the option was not given.
    """

    verbose: bool = False
    excludes: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    dotfiles_path: Path | None = None
    hostname: str | None = None
    platform: Platform | None = None
    command: Command = field(default_factory=Command)

    @classmethod
    def from_options(
        cls,
        top: SharedOptions,
        sub: SharedOptions,
        command: Command,
    ) -> "CliConfig":
        """Merge global and subcommand options.

        Args:
            top: Options given before the subcommand.
            sub: Options given after the subcommand.
            command: The subcommand that was invoked.

        Returns:
            CliConfig with relative dotfiles paths made absolute.

        Raises:
            DuplicateOptionError: If a single-valued option is given twice.
            PlatformParseError: If the platform name is not recognized.
        """
        dotfiles_path = _unique("dotfiles-path", top.dotfiles_path, sub.dotfiles_path)
        hostname = _unique("hostname", top.hostname, sub.hostname)
        platform = _unique("platform", top.platform, sub.platform)

        return cls(
            verbose=top.verbose or sub.verbose,
            excludes=(*top.excludes, *sub.excludes),
            tags=(*top.tags, *sub.tags),
            dotfiles_path=dotfiles_path.absolute() if dotfiles_path is not None else None,
            hostname=hostname,
            platform=Platform.parse(platform) if platform is not None else None,
            command=command,
        )


def single_value(option: str, values: Sequence[T] | None) -> T | None:
    """Get the value of an option that may be given at most once.

    Raises:
        DuplicateOptionError: If the option was given more than once.
    """
    if not values:
        return None
    if len(values) > 1:
        raise DuplicateOptionError(option)
    return values[0]


def _unique(option: str, top: T | None, sub: T | None) -> T | None:
    if top is not None and sub is not None:
        raise DuplicateOptionError(option)
    return top if top is not None else sub
