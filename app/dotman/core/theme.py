"""Color theme for dotman output.

The bundled ``data/theme.toml`` holds the default palette. Any subset of
its ``[colors]`` can be overridden in ``~/.config/dotman/theme.toml``.
A broken override never stops dotman; it only logs a warning.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from rich.theme import Theme

from dotman.core.errors import NoHomeDirectoryError
from dotman.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _check_hex(value: object) -> str:
    """Accept ``#RGB`` and ``#RRGGBB`` strings, surrounding blanks ignored."""
    if not isinstance(value, str):
        raise ValueError("color must be a string")
    color = value.strip()
    digits = color.removeprefix("#")
    if digits == color:
        raise ValueError(f"color {color!r} must start with '#'")
    if len(digits) not in (3, 6):
        raise ValueError(f"color {color!r} must be #RGB or #RRGGBB")
    if any(c not in "0123456789abcdefABCDEF" for c in digits):
        raise ValueError(f"invalid hex color {color!r}")
    return color


HexColor = Annotated[str, BeforeValidator(_check_hex)]


class ThemeColors(BaseModel):
    """Palette used by the console.

    Attributes:
        text, muted, header, border: General text and table chrome.
        success, warning, error, info: Message levels.
        source, dest: The two sides of an item listing.
        created, overwritten: Link outcomes.
    """

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    source: HexColor = "#b2bec3"
    dest: HexColor = "#69B9A1"
    created: HexColor = "#c1ff62"
    overwritten: HexColor = "#0e8ac8"


# Rich style name -> (palette field, extra style attributes)
_STYLES: dict[str, tuple[str, str]] = {
    "text": ("text", ""),
    "muted": ("muted", ""),
    "dim": ("muted", ""),
    "header": ("header", ""),
    "bold_header": ("header", "bold"),
    "border": ("border", ""),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "item.source": ("source", ""),
    "item.dest": ("dest", "bold"),
    "link.created": ("created", ""),
    "link.overwritten": ("overwritten", ""),
}


def get_bundled_theme_path() -> Path:
    """Get the path of the theme shipped with the package."""
    return Path(str(resources.files("dotman.data").joinpath("theme.toml")))


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string values are dropped; validation happens in ThemeColors.

    Returns:
        Color names mapped to values, or None if the file is missing or
        unusable.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {name: value for name, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Load the palette, applying user overrides on top of the bundled one.

    Returns:
        Validated palette; the built-in defaults if validation fails.
    """
    colors = _load_toml_colors(get_bundled_theme_path())
    if colors is None:
        logger.error("Bundled theme is missing, the installation may be corrupted")
        colors = {}

    try:
        user_path = get_user_theme_path()
    except NoHomeDirectoryError:
        user_path = None
    if user_path is not None:
        overrides = _load_toml_colors(user_path)
        if overrides:
            logger.debug("Applying theme overrides from %s", user_path)
            colors.update(overrides)

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme, using default colors: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a palette (loaded from disk if not given)."""
    palette = colors if colors is not None else load_theme()
    styles: dict[str, str] = {}
    for style, (field, attrs) in _STYLES.items():
        color = getattr(palette, field)
        styles[style] = f"{attrs} {color}" if attrs else color
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Get the Rich theme, loaded once per process."""
    return get_rich_theme()
