"""In-memory history backed by the history file."""

import threading

from ijq.domain.errors import HistoryError
from ijq.infrastructure import history as history_file
from ijq.logger import get_logger
from ijq.utils import shorten

logger = get_logger("history")


class History:
    """
    Ordered, deduplicated log of committed filters.

    Holds the entries in chronological order plus a set for membership
    checks. Both are guarded by one lock since completion lookups read the
    history while a commit may be recording into it.
    """

    def __init__(self, path: str, entries: list[str] | None = None):
        """
        Args:
            path: History file; an empty string keeps history in memory only
            entries: Initial entries, normally from ``History.load``
        """
        self.path = path
        self._entries: list[str] = []
        self._seen: set[str] = set()
        self._lock = threading.Lock()
        for entry in entries or []:
            if entry not in self._seen:
                self._entries.append(entry)
                self._seen.add(entry)

    @classmethod
    def load(cls, path: str) -> "History":
        """Load the history file; never fails."""
        return cls(path, history_file.load(path))

    def entries(self) -> list[str]:
        """Snapshot of all entries, oldest first."""
        with self._lock:
            return list(self._entries)

    def contains(self, entry: str) -> bool:
        with self._lock:
            return entry in self._seen

    def record(self, entry: str) -> bool:
        """
        Add a committed filter and persist it.

        Persisting is best-effort: a write failure is logged and the entry
        stays in memory for the rest of the session.

        Returns:
            True if the entry was new, False if it was already present
        """
        with self._lock:
            if entry in self._seen:
                return False
            self._entries.append(entry)
            self._seen.add(entry)

        if not self.path:
            return True

        try:
            history_file.append(self.path, entry)
            logger.info(f"Saved filter to history: '{shorten(entry)}'")
        except HistoryError as e:
            logger.warning(f"History not saved: {e}")
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
