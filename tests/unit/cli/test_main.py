"""Unit tests for the main CLI application."""

from dotman import __version__
from dotman.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMain:
    """Tests for global behaviour of the dot command."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"dotman version {__version__}" in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "ls" in result.output
        assert "link" in result.output

    def test_unknown_command(self) -> None:
        result = runner.invoke(app, ["unlink"])

        assert result.exit_code == 2
