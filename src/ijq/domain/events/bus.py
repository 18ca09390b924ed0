"""Event bus for decoupled communication between the UI and the controller.

Event Handler Contract:
    Handlers MUST be synchronous. They are fast coordinators that schedule
    async work (``asyncio.create_task``) rather than awaiting it.
"""

import asyncio
from typing import Callable, Type, TypeVar

from ijq.logger import get_logger

from .types import Event

logger = get_logger("events.bus")

T = TypeVar("T", bound=Event)

EventHandler = Callable[[Event], None]


class EventBus:
    """Publish/subscribe by event type.

    Example:
        ```python
        bus = EventBus()
        bus.subscribe(FilterChanged, lambda event: print(event.text))
        bus.publish(FilterChanged(text=".a"))
        ```

    Thread safety:
        Not thread-safe. All publishing happens on the UI event loop.
    """

    def __init__(self):
        self._handlers: dict[Type[Event], list[Callable[[Event], None]]] = {}

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """
        Subscribe ``handler`` to events of ``event_type``.

        Raises:
            TypeError: If handler is a coroutine function
        """
        if asyncio.iscoroutinefunction(handler):
            raise TypeError(
                f"Event handlers must be synchronous functions. "
                f"Handler {handler.__name__} is an async function. "
                f"Schedule async work with asyncio.create_task() instead."
            )

        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)  # type: ignore[arg-type]
            logger.debug(f"Subscribed handler for {event_type.__name__}")
        else:
            logger.debug(f"Handler already subscribed for {event_type.__name__}, skipping")

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Remove a handler; no-op if it was never subscribed."""
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)  # type: ignore[arg-type]
                logger.debug(f"Unsubscribed handler for {event_type.__name__}")
            except ValueError:
                logger.debug(f"Handler not found in subscriptions for {event_type.__name__}")

    def publish(self, event: Event) -> None:
        """
        Call every handler subscribed to ``type(event)``, in subscription order.

        A failing handler is logged and does not stop the others.
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type, [])

        if not handlers:
            logger.debug(f"No handlers subscribed for {event_type.__name__}")
            return

        for handler in list(handlers):
            try:
                handler(event)
            except Exception as e:
                logger.exception(f"Error in event handler for {event_type.__name__}: {e}")

    def clear(self) -> None:
        self._handlers.clear()

    def has_subscribers(self, event_type: Type[Event]) -> bool:
        return bool(self._handlers.get(event_type))
