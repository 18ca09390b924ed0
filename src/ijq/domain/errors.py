"""Error taxonomy.

Only ``EngineUnavailableError``, ``DocumentError`` and ``UsageError`` are
allowed to end the process, and only before the interactive session starts.
``HistoryError`` is always contained by its callers.
"""


class IjqError(Exception):
    """Base class for all ijq errors."""


class EngineUnavailableError(IjqError):
    """The jq executable could not be started at all."""

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        self.reason = reason
        super().__init__(f"cannot run '{executable}': {reason}")


class DocumentError(IjqError):
    """The input document could not be read."""


class HistoryError(IjqError):
    """Reading or writing the history file failed."""


class UsageError(IjqError):
    """The command line does not describe a usable session."""
