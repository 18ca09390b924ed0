"""Event types for the event bus."""

import time
from dataclasses import dataclass, field


@dataclass
class Event:
    """Base class for all events; ``timestamp`` is set on creation."""

    timestamp: float = field(default_factory=time.time, init=False)


@dataclass
class FilterChanged(Event):
    """The filter text in the input field changed."""

    text: str


@dataclass
class CompletionRequested(Event):
    """The input field asked for completion candidates for ``text``."""

    text: str


@dataclass
class SuggestionsReady(Event):
    """A background key lookup stored new candidates for ``prefix``."""

    prefix: str
    count: int
