"""Home directory and XDG path management for dotman.

The home directory is looked up lazily: it is only required when a
default dotfiles path is computed, a leading ``~`` is expanded, or a
destination is built.
"""

import os
from pathlib import Path

from dotman.core.errors import NoHomeDirectoryError

# Application identifier for directory naming
APP_NAME = "dotman"

# Dotfiles folder used when neither the CLI nor the dotrc name one
DEFAULT_DOTFILES_DIR = ".dotfiles"


def get_home_dir() -> Path:
    """Get the user's home directory.

    Returns:
        Absolute path to the home directory.

    Raises:
        NoHomeDirectoryError: If the home directory cannot be determined.
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise NoHomeDirectoryError() from e
    if not home.is_absolute():
        raise NoHomeDirectoryError()
    return home


def get_default_dotfiles_path() -> Path:
    """Get the default dotfiles folder.

    Returns:
        Path to ~/.dotfiles.
    """
    return get_home_dir() / DEFAULT_DOTFILES_DIR


def expand_tilde(path: str) -> str:
    """Expand a leading ``~`` into the home directory.

    Only the first character is considered, so ``~/x`` and ``~x`` both
    expand. Paths without a leading tilde are returned unchanged and
    never trigger a home directory lookup.

    Raises:
        NoHomeDirectoryError: If expansion is needed but the home
            directory cannot be determined.
    """
    if not path.startswith("~"):
        return path
    return str(get_home_dir()) + path[1:]


def collapse_home(path: Path) -> str:
    """Format a path with the home directory shown as ``~``.

    Falls back to the plain path when the home directory is unknown or
    the path lies outside of it.
    """
    try:
        relative = path.relative_to(get_home_dir())
    except (ValueError, NoHomeDirectoryError):
        return str(path)
    if relative == Path():
        return "~"
    return f"~/{relative}"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/dotman/ (or XDG_CONFIG_HOME/dotman/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return get_home_dir() / ".config" / APP_NAME


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/dotman/theme.toml.
    """
    return get_config_dir() / "theme.toml"
