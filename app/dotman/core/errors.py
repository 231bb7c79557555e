"""Exception hierarchy for dotman.

Every error that should reach the user derives from DotmanError so the
CLI can report it with a single handler and exit with a non-zero status.
"""


class DotmanError(Exception):
    """Base exception for all dotman errors."""


class NoHomeDirectoryError(DotmanError):
    """Raised when the user's home directory cannot be determined."""

    def __init__(self) -> None:
        super().__init__("error finding home directory")


class NoSystemHostnameError(DotmanError):
    """Raised when the system hostname cannot be read."""

    def __init__(self) -> None:
        super().__init__("error reading system hostname")
