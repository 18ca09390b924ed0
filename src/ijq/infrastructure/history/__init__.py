"""History file persistence."""

from ijq.infrastructure.history.file import append, load

__all__ = ["append", "load"]
