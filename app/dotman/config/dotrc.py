"""Reading the dotrc file.

The dotrc is an optional file holding the same settings as the command
line. It may be written in YAML (``.dotrc``, ``.dotrc.yaml``,
``.dotrc.yml``) or TOML (``.dotrc.toml``). A missing dotrc is the same
as an empty one; a dotrc that cannot be read or parsed is an error, as
is any key the format does not know about.
"""

import tomllib
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dotman.core.errors import DotmanError

# Recognized dotrc names, in lookup priority order
DOTRC_NAMES: tuple[str, ...] = (".dotrc", ".dotrc.yaml", ".dotrc.yml", ".dotrc.toml")


class DotrcError(DotmanError):
    """Base exception for dotrc errors."""


class DotrcParseError(DotrcError):
    """Raised when the dotrc is malformed or has unknown keys."""


class DotrcReadError(DotrcError):
    """Raised when an existing dotrc cannot be read."""


class DotrcConfig(BaseModel):
    """Configuration options available in the dotrc.

    Attributes:
        excludes: Paths or globs, relative to the dotfiles folder, to exclude.
        tags: Tags to enable.
        dotfiles_path: Dotfiles folder; may start with ``~``.
        hostname: Hostname to use.
        platform: Platform name to use.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    excludes: Annotated[list[str] | None, Field(description="Excluded paths or globs")] = None
    tags: Annotated[list[str] | None, Field(description="Enabled tags")] = None
    dotfiles_path: Annotated[
        str | None,
        Field(alias="dotfiles-path", description="Dotfiles folder"),
    ] = None
    hostname: Annotated[str | None, Field(description="Hostname override")] = None
    platform: Annotated[str | None, Field(description="Platform override")] = None


def load_dotrc(path: Path | None) -> DotrcConfig:
    """Load and validate a dotrc file.

    Args:
        path: Path to the dotrc, or None when no dotrc was found.

    Returns:
        Validated DotrcConfig; empty when the file is absent or empty.

    Raises:
        DotrcReadError: If the file exists but cannot be read.
        DotrcParseError: If the content is malformed or has unknown keys.
    """
    if path is None:
        return DotrcConfig()

    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return DotrcConfig()
    except (OSError, UnicodeDecodeError) as e:
        raise DotrcReadError(f"error reading {path.name} ({e})") from e

    if not contents.strip():
        return DotrcConfig()

    data = _parse(path, contents)
    if data is None:
        return DotrcConfig()
    if not isinstance(data, dict):
        raise DotrcParseError(f"error parsing {path.name} (expected a mapping of options)")

    try:
        return DotrcConfig.model_validate(data)
    except ValidationError as e:
        raise DotrcParseError(f"error parsing {path.name} ({e})") from e


def _parse(path: Path, contents: str) -> Any:
    """Parse raw dotrc contents according to the file extension."""
    if path.suffix == ".toml":
        try:
            return tomllib.loads(contents)
        except tomllib.TOMLDecodeError as e:
            raise DotrcParseError(f"error parsing {path.name} ({e})") from e
    try:
        return yaml.safe_load(contents)
    except yaml.YAMLError as e:
        raise DotrcParseError(f"error parsing {path.name} ({e})") from e
