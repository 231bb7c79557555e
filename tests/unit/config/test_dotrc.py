"""Unit tests for reading the dotrc."""

import os
from pathlib import Path

import pytest
from dotman.config.dotrc import (
    DOTRC_NAMES,
    DotrcConfig,
    DotrcParseError,
    DotrcReadError,
    load_dotrc,
)


def _write(tmp_path: Path, name: str, contents: str) -> Path:
    path = tmp_path / name
    path.write_text(contents)
    return path


class TestLoadDotrc:
    """Tests for load_dotrc function."""

    def test_no_path(self) -> None:
        assert load_dotrc(None) == DotrcConfig()

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_dotrc(tmp_path / ".dotrc") == DotrcConfig()

    @pytest.mark.parametrize("contents", ["", "   \n\n", "# only a comment\n", "~\n"])
    def test_empty_yaml(self, tmp_path: Path, contents: str) -> None:
        assert load_dotrc(_write(tmp_path, ".dotrc", contents)) == DotrcConfig()

    def test_full_yaml(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            ".dotrc.yaml",
            "excludes:\n  - secrets/*\ntags: [vim, work]\n"
            "dotfiles-path: ~/dots\nhostname: box\nplatform: mac\n",
        )

        dotrc = load_dotrc(path)

        assert dotrc.excludes == ["secrets/*"]
        assert dotrc.tags == ["vim", "work"]
        assert dotrc.dotfiles_path == "~/dots"
        assert dotrc.hostname == "box"
        assert dotrc.platform == "mac"

    def test_partial_yaml(self, tmp_path: Path) -> None:
        dotrc = load_dotrc(_write(tmp_path, ".dotrc", "tags:\n  - vim\n"))

        assert dotrc.tags == ["vim"]
        assert dotrc.excludes is None
        assert dotrc.hostname is None

    def test_toml(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            ".dotrc.toml",
            'tags = ["vim"]\n"dotfiles-path" = "~/dots"\nplatform = "linux"\n',
        )

        dotrc = load_dotrc(path)

        assert dotrc.tags == ["vim"]
        assert dotrc.dotfiles_path == "~/dots"
        assert dotrc.platform == "linux"

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, ".dotrc", "tagz:\n  - vim\n")

        with pytest.raises(DotrcParseError, match="error parsing .dotrc"):
            load_dotrc(path)

    def test_snake_case_path_key_rejected(self, tmp_path: Path) -> None:
        """Only the dashed spelling of dotfiles-path is accepted."""
        path = _write(tmp_path, ".dotrc", "dotfiles_path: ~/dots\n")

        with pytest.raises(DotrcParseError):
            load_dotrc(path)

    def test_wrong_type_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, ".dotrc", "tags: vim\n")

        with pytest.raises(DotrcParseError):
            load_dotrc(path)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, ".dotrc.yml", "tags: [vim\n")

        with pytest.raises(DotrcParseError, match="error parsing .dotrc.yml"):
            load_dotrc(path)

    def test_malformed_toml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, ".dotrc.toml", "tags = [\n")

        with pytest.raises(DotrcParseError, match="error parsing .dotrc.toml"):
            load_dotrc(path)

    def test_top_level_list_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, ".dotrc", "- vim\n- work\n")

        with pytest.raises(DotrcParseError, match="expected a mapping"):
            load_dotrc(path)

    def test_directory_is_read_error(self, tmp_path: Path) -> None:
        """Anything but a missing file is reported when reading fails."""
        path = tmp_path / ".dotrc"
        path.mkdir()

        with pytest.raises(DotrcReadError, match="error reading .dotrc"):
            load_dotrc(path)

    @pytest.mark.skipif(os.geteuid() == 0, reason="root ignores file permissions")
    def test_unreadable_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path, ".dotrc", "tags: [vim]\n")
        path.chmod(0)

        with pytest.raises(DotrcReadError):
            load_dotrc(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / ".dotrc"
        path.write_bytes(b"tags: [\xff]\n")

        with pytest.raises(DotrcReadError):
            load_dotrc(path)


class TestDotrcNames:
    """Tests for the recognized dotrc names."""

    def test_plain_name_first(self) -> None:
        assert DOTRC_NAMES[0] == ".dotrc"
        assert set(DOTRC_NAMES) == {".dotrc", ".dotrc.yaml", ".dotrc.yml", ".dotrc.toml"}
