"""Platform detection predicates.

All predicates take an optional platform string (defaulting to
sys.platform) so they can be exercised for any OS in tests.
"""

import logging
import re
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

PN_OS_ISSUE = Path("/etc/issue")
PN_OS_RELEASE = Path("/proc/version")
PN_OS_VERSION = Path("/proc/sys/kernel/osrelease")

CMD_OS_VERSION_WIN32 = "ver"
CMD_OS_VERSION_UX = "uname"

# Platform names treated as Unix-like in addition to Linux and Cygwin
UNIX_LIKE = (
    "aix", "bsdos", "darwin", "dec_osf", "dgux", "dynix", "freebsd", "hpux",
    "irix", "linux", "macos", "netbsd", "openbsd", "sco", "solaris", "sunos",
    "svr4", "ultrix", "unicos",
)


def _platform(name: str | None) -> str:
    return (name or sys.platform).lower()


def on_linux(name: str | None = None) -> bool:
    return "linux" in _platform(name)


def on_windows(name: str | None = None) -> bool:
    plat = _platform(name)
    return plat.startswith("win32") or "mswin" in plat


def on_cygwin(name: str | None = None) -> bool:
    return "cygwin" in _platform(name)


def like_unix(name: str | None = None) -> bool:
    """Unix-like, including Linux and Cygwin."""
    if on_linux(name) or on_cygwin(name):
        return True
    plat = _platform(name)
    return any(os_name in plat for os_name in UNIX_LIKE)


def kernel_mentions_microsoft(*candidates: Path) -> bool | None:
    """Scan the first readable kernel release file for "microsoft".

    Returns:
        True/False from the first existing file, or None when none exist.
    """
    for pn in candidates:
        if pn.is_file():
            text = pn.read_text(errors="replace")
            found = re.search("microsoft", text, re.IGNORECASE) is not None
            logger.debug("pn [%s] wsl [%s]", pn, found)
            return found
    return None
