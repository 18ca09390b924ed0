"""Event system for decoupled component communication.

The UI publishes what the user did (``FilterChanged``,
``CompletionRequested``); the controller subscribes and publishes
``SuggestionsReady`` when background lookups land.
"""

from .bus import EventBus
from .types import (
    CompletionRequested,
    Event,
    FilterChanged,
    SuggestionsReady,
)

__all__ = [
    "EventBus",
    "Event",
    "FilterChanged",
    "CompletionRequested",
    "SuggestionsReady",
]
