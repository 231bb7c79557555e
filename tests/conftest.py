"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules. Every test
runs against a throwaway home directory so nothing touches the real one.
"""

from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from dotman.config.models import Command, Config
from dotman.models.item import AbsolutePath
from dotman.models.platform import Platform


@pytest.fixture(autouse=True)
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at a temporary folder."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    return home_dir


@pytest.fixture
def dotfiles(home: Path) -> Path:
    """An empty dotfiles folder at the default location (~/.dotfiles)."""
    path = home / ".dotfiles"
    path.mkdir()
    return path


def write_files(root: Path, files: Iterable[str]) -> None:
    """Create files (with parent folders) below root.

    Each entry is a relative path; its content is the path itself.
    """
    for relative in files:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(relative)


@pytest.fixture
def make_tree(dotfiles: Path) -> Callable[..., Path]:
    """Factory populating the dotfiles folder."""

    def _make(*files: str) -> Path:
        write_files(dotfiles, files)
        return dotfiles

    return _make


@pytest.fixture
def make_config(dotfiles: Path) -> Callable[..., Config]:
    """Factory building a final Config rooted at the dotfiles fixture."""

    def _make(
        *,
        excludes: Iterable[str] = (),
        tags: Iterable[str] = (),
        hostname: str = "testhost",
        platform: Platform = Platform.LINUX,
        root: Path | None = None,
    ) -> Config:
        base = root or dotfiles
        return Config(
            excludes=tuple(AbsolutePath(base / e) for e in excludes),
            tags=tuple(tags),
            dotfiles_path=AbsolutePath(base),
            hostname=hostname,
            platform=platform,
            command=Command(),
        )

    return _make


@pytest.fixture
def system() -> Iterator[None]:
    """Pin the system hostname and platform used for defaults."""
    with (
        patch("dotman.config.defaults.socket.gethostname", return_value="testhost"),
        patch("dotman.config.defaults.detect_platform", return_value=Platform.LINUX),
    ):
        yield
