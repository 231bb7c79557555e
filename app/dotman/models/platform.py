"""Platform model.

Linux and WSL are distinct platforms: a WSL machine never activates
``platform-linux`` directories.
"""

from enum import Enum

from dotman.core.errors import DotmanError


class PlatformParseError(DotmanError):
    """Raised when a string does not name a supported platform."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f'unsupported platform "{text}"')


class Platform(str, Enum):
    """Platforms that dotman distinguishes between."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    WSL = "wsl"

    @property
    def aliases(self) -> tuple[str, ...]:
        """Names accepted for this platform, in the CLI, the dotrc and in
        ``platform-`` directory names."""
        return _ALIASES[self]

    @classmethod
    def parse(cls, text: str) -> "Platform":
        """Parse a platform name, ignoring case and surrounding whitespace.

        Raises:
            PlatformParseError: If no platform has ``text`` as an alias.
        """
        name = text.strip().lower()
        for platform in cls:
            if name in platform.aliases:
                return platform
        raise PlatformParseError(name)


_ALIASES: dict[Platform, tuple[str, ...]] = {
    Platform.WINDOWS: ("win", "windows"),
    Platform.MACOS: ("mac", "macos"),
    Platform.LINUX: ("linux",),
    Platform.WSL: ("wsl",),
}
