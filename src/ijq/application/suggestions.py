"""
Path-completion suggestions drawn from the document's own keys.

``complete`` answers synchronously from the cache (or from history when the
filter is empty). A cache miss schedules a background key lookup through the
engine; when it lands, the cache is filled and ``on_ready`` fires so the UI
can refresh the open suggestion list. Lookup failures are never shown to the
user; they are logged and counted.
"""

import asyncio
import json
import threading
from typing import Callable

from ijq.config import Configuration
from ijq.domain.document import Document
from ijq.domain.errors import EngineUnavailableError
from ijq.domain.protocols import Cache, EvaluationEngine
from ijq.domain.types import Failure
from ijq.infrastructure.cache import MemoryCache
from ijq.logger import get_logger

from .history import History

logger = get_logger("suggestions")

SEPARATOR = "."

# Key lookups always slurp: every value of a multi-value stream contributes
# its keys. When the user slurps too, the prefix already addresses the
# slurped array and is applied to it directly.
LOOKUP_CONFIGURATION = Configuration(compact=True, slurp=True, monochrome=True, history_path="")


def prefix_of(text: str) -> str | None:
    """
    The part of ``text`` before its last path separator.

    Returns:
        The prefix (possibly empty), or None when ``text`` has no separator
    """
    pos = text.rfind(SEPARATOR)
    if pos == -1:
        return None
    return text[:pos]


def key_filter(prefix: str, slurped: bool = False) -> str:
    """
    jq program listing the distinct object keys reachable at ``prefix``.

    Args:
        prefix: Path the user typed before the last separator
        slurped: Whether the user's own filter runs against the slurped array
    """
    if slurped and prefix:
        return f"[{prefix} | objects | keys[]] | unique"
    path = f" | {prefix}" if prefix else ""
    return f"[.[]{path} | objects | keys[]] | unique"


def parse_keys(output: str) -> list[str] | None:
    """Parse the lookup output as a JSON array of strings, or None if it is anything else."""
    try:
        keys = json.loads(output)
    except ValueError:
        return None
    if not isinstance(keys, list) or not all(isinstance(key, str) for key in keys):
        return None
    return keys


class SuggestionService:
    """Completion candidates for the filter input."""

    def __init__(
        self,
        engine: EvaluationEngine,
        document: Document,
        history: History,
        cache: Cache[str, list[str]] | None = None,
        on_ready: Callable[[str, list[str]], None] | None = None,
    ):
        """
        Args:
            engine: Engine used for background key lookups
            document: The loaded document
            history: Committed filters, offered when the input is empty
            cache: Prefix -> candidates store. Defaults to a MemoryCache
            on_ready: Called on the event loop after a lookup stored candidates
        """
        self.engine = engine
        self.document = document
        self.history = history
        self.cache: Cache[str, list[str]] = cache if cache is not None else MemoryCache[str, list[str]]()
        self.on_ready = on_ready

        self._in_flight: set[str] = set()
        self._lock = threading.Lock()
        self._tasks: set[asyncio.Task] = set()

        self.fetch_count = 0
        self.failed_fetches = 0

    def complete(self, text: str) -> list[str]:
        """
        Candidates for ``text``, answered immediately.

        May schedule a background lookup; its results show up on a later call.
        """
        if text == "":
            return self.history.entries()

        prefix = prefix_of(text)
        if prefix is None:
            return []

        cached = self.cache.get(prefix)
        if cached is not None:
            return list(cached)

        self._schedule_fetch(prefix)
        return []

    def _schedule_fetch(self, prefix: str) -> None:
        with self._lock:
            if prefix in self._in_flight:
                logger.debug(f"Lookup for prefix '{prefix}' already in flight")
                return
            self._in_flight.add(prefix)
            self.fetch_count += 1

        task = asyncio.create_task(self._fetch_and_store(prefix))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _fetch_and_store(self, prefix: str) -> None:
        try:
            candidates = await self.fetch(prefix)
        finally:
            with self._lock:
                self._in_flight.discard(prefix)

        if candidates is None:
            with self._lock:
                self.failed_fetches += 1
            return

        self.cache.set(prefix, candidates)
        logger.debug(f"Cached {len(candidates)} suggestions for prefix '{prefix}'")

        if self.on_ready is not None:
            self.on_ready(prefix, candidates)

    async def fetch(self, prefix: str) -> list[str] | None:
        """
        Look up the keys reachable at ``prefix``.

        Returns:
            Candidate completions, or None if the lookup failed for any reason
        """
        program = key_filter(prefix, slurped=self.document.configuration.slurp)
        try:
            result = await self.engine.evaluate(self.document.text, program, LOOKUP_CONFIGURATION)
        except EngineUnavailableError as e:
            logger.warning(f"Key lookup for prefix '{prefix}' could not run: {e}")
            return None

        if isinstance(result, Failure):
            logger.debug(f"Key lookup for prefix '{prefix}' failed: {result.diagnostic.strip()}")
            return None

        keys = parse_keys(result.output)
        if keys is None:
            logger.debug(f"Key lookup for prefix '{prefix}' returned unusable output")
            return None

        return [f"{prefix}{SEPARATOR}{key}" for key in keys]

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def wait_idle(self) -> None:
        """Wait for every scheduled lookup to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
