"""Data models for dotman.

This module exports the path, item and platform models.
"""

from dotman.models.item import AbsolutePath, Item
from dotman.models.platform import Platform, PlatformParseError

__all__ = [
    "AbsolutePath",
    "Item",
    "Platform",
    "PlatformParseError",
]
