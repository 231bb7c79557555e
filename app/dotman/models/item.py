"""Path and item models.

An Item pairs a file inside the dotfiles tree with the location of the
symlink that points to it in the home directory.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotman.core.paths import collapse_home


@dataclass(frozen=True, slots=True, order=True)
class AbsolutePath:
    """A filesystem path that is guaranteed to be absolute.

    Constructing one from a relative path is a programming error and
    raises ValueError. ``str()`` shows the home directory as ``~``; use
    ``os.fspath()`` or ``.path`` for the real location.

    Attributes:
        path: The wrapped absolute path.
    """

    path: Path

    def __post_init__(self) -> None:
        """Validate and normalize the wrapped path."""
        path = Path(self.path)
        if not path.is_absolute():
            msg = f"Path must be absolute, got {str(path)!r}"
            raise ValueError(msg)
        object.__setattr__(self, "path", path)

    def __fspath__(self) -> str:
        return os.fspath(self.path)

    def __str__(self) -> str:
        return collapse_home(self.path)

    def __truediv__(self, other: str | Path) -> "AbsolutePath":
        return AbsolutePath(self.path / other)

    @property
    def name(self) -> str:
        """Final path component."""
        return self.path.name

    @property
    def parent(self) -> "AbsolutePath":
        """Containing directory."""
        return AbsolutePath(self.path.parent)


@dataclass(frozen=True, slots=True)
class Item:
    """A dotfile and the symlink that exposes it.

    Attributes:
        source: File inside the dotfiles tree.
        dest: Symlink location in the home directory.
    """

    source: AbsolutePath
    dest: AbsolutePath

    @classmethod
    def of(cls, source: str | Path, dest: str | Path) -> "Item":
        """Build an item from plain paths."""
        return cls(source=AbsolutePath(Path(source)), dest=AbsolutePath(Path(dest)))
