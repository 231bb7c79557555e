"""Computed fallback configuration."""

import socket
from dataclasses import dataclass
from pathlib import Path

from dotman.core.errors import NoSystemHostnameError
from dotman.core.paths import get_default_dotfiles_path
from dotman.core.platform import detect_platform
from dotman.models.platform import Platform


@dataclass(frozen=True, slots=True)
class DefaultConfig:
    """Values used when neither the CLI nor the dotrc set an option."""

    dotfiles_path: Path
    hostname: str
    platform: Platform
    excludes: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    verbose: bool = False

    @classmethod
    def get(cls) -> "DefaultConfig":
        """Compute the default configuration from the environment.

        Raises:
            NoHomeDirectoryError: If the home directory cannot be found.
            NoSystemHostnameError: If the hostname cannot be read.
        """
        return cls(
            dotfiles_path=get_default_dotfiles_path(),
            hostname=get_system_hostname(),
            platform=detect_platform(),
        )


def get_system_hostname() -> str:
    """Read the system hostname.

    Raises:
        NoSystemHostnameError: If the hostname is empty or unreadable.
    """
    try:
        hostname = socket.gethostname()
    except OSError as e:
        raise NoSystemHostnameError() from e
    if not hostname:
        raise NoSystemHostnameError()
    return hostname
