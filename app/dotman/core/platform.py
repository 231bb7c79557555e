"""Platform detection.

WSL runs a Linux kernel, so it is told apart from plain Linux by the
kernel release string, which Microsoft builds tag with "microsoft".
"""

import logging
import sys
from pathlib import Path

from dotman.models.platform import Platform, PlatformParseError

logger = logging.getLogger(__name__)

_OSRELEASE_PATH = Path("/proc/sys/kernel/osrelease")


def is_wsl(osrelease_path: Path = _OSRELEASE_PATH) -> bool:
    """Check whether we are running under the Windows Subsystem for Linux.

    Args:
        osrelease_path: Kernel release file to inspect.

    Returns:
        True if the kernel release mentions Microsoft or WSL.
    """
    try:
        release = osrelease_path.read_text(encoding="utf-8").lower()
    except OSError:
        return False
    return "microsoft" in release or "wsl" in release


def detect_platform() -> Platform:
    """Determine the platform dotman is running on.

    Returns:
        The detected Platform.

    Raises:
        PlatformParseError: If the interpreter platform is not supported.
    """
    if sys.platform.startswith("linux"):
        if is_wsl():
            logger.debug("Detected WSL kernel")
            return Platform.WSL
        return Platform.LINUX
    if sys.platform == "darwin":
        return Platform.MACOS
    if sys.platform in ("win32", "cygwin"):
        return Platform.WINDOWS
    raise PlatformParseError(sys.platform)
