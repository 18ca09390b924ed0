"""
Utility functions for ijq.
"""

import os
import sys
from pathlib import Path


def get_data_dir() -> str:
    """
    Get the per-user data directory for ijq.

    Follows the XDG base directory convention: ``$XDG_DATA_HOME/ijq``,
    falling back to ``~/.local/share/ijq``.

    Returns:
        Absolute path to the data directory (not created)
    """
    base = os.getenv("XDG_DATA_HOME") or os.path.join(Path.home(), ".local", "share")
    return os.path.join(base, "ijq")


def stdin_has_data() -> bool:
    """Return True when standard input is piped or redirected rather than a terminal."""
    stdin = sys.stdin
    if stdin is None or stdin.closed:
        return False
    try:
        return not stdin.isatty()
    except ValueError:
        return False


def reattach_terminal() -> bool:
    """
    Point file descriptor 0 back at the controlling terminal.

    After a piped document has been consumed, the UI still needs a terminal
    to read keystrokes from.

    Returns:
        True if the terminal was reattached, False if none is available
    """
    try:
        tty_fd = os.open("/dev/tty", os.O_RDONLY)
    except OSError:
        return False
    try:
        os.dup2(tty_fd, 0)
    finally:
        os.close(tty_fd)
    sys.stdin = open(0, "r", closefd=False)
    return True


def shorten(text: str, limit: int = 50) -> str:
    """Truncate text for log messages."""
    return f"{text[:limit]}{'...' if len(text) > limit else ''}"
