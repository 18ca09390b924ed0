"""History file I/O.

The file is newline-delimited UTF-8, one filter per line, append-only and
unescaped. Filters containing newlines are not supported.
"""

from pathlib import Path

from ijq.domain.errors import HistoryError
from ijq.logger import get_logger

logger = get_logger(__name__)


def load(path: str | Path) -> list[str]:
    """
    Read all history entries in file (chronological) order.

    Best-effort: a missing or unreadable file yields an empty list.

    Args:
        path: History file path; an empty string disables history

    Returns:
        Non-empty lines of the file
    """
    if not str(path):
        return []

    filepath = Path(path).expanduser()
    if not filepath.exists():
        logger.debug(f"History file not found: {filepath}")
        return []

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            entries = [line.rstrip("\r\n") for line in f]
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Ignoring unreadable history file {filepath}: {e}")
        return []

    entries = [entry for entry in entries if entry]
    logger.debug(f"Loaded {len(entries)} history entries from {filepath}")
    return entries


def append(path: str | Path, entry: str) -> None:
    """
    Append exactly one line to the history file.

    Creates the file and its parent directories as needed.

    Raises:
        HistoryError: If no path is configured or the write fails
    """
    if not str(path):
        raise HistoryError("no filepath specified")

    filepath = Path(path).expanduser()
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "a", encoding="utf-8") as f:
            f.write(entry + "\n")
    except OSError as e:
        logger.error(f"Failed to append to history file {filepath}: {e}")
        raise HistoryError(f"cannot write history file: {e}") from e

    logger.debug(f"Appended history entry to {filepath}")
