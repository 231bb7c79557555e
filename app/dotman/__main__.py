"""Allow running dotman as ``python -m dotman``."""

from dotman.cli.main import app

if __name__ == "__main__":
    app()
