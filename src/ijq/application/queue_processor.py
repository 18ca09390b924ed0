"""
Async FIFO queue processor with a single consumer.

Background evaluations and suggestion lookups are producers; the worker task
on the UI event loop is the only consumer, so everything the processor does
(applying results to the display) happens in one place and in arrival order.
"""

import asyncio
from typing import Callable, Generic, TypeVar

from ijq.logger import get_logger

logger = get_logger("queue_processor")

T = TypeVar("T")


class AsyncQueueProcessor(Generic[T]):
    """
    Generic async FIFO queue processor with background worker.

    Type Parameters:
        T: Type of items to process

    Lifecycle:
        1. Create instance with processor function
        2. Call `start()` to begin background worker
        3. Call `enqueue(item)` / `enqueue_nowait(item)` to add items
        4. Call `stop()` to shut down

    Error Handling:
        - Processor exceptions are logged but don't stop the worker
        - Graceful cancellation on stop()
    """

    def __init__(
        self,
        processor: Callable[[T], None],
        *,
        name: str = "AsyncQueue",
    ):
        """
        Initialize the async queue processor.

        Args:
            processor: Function called with each item, on the event loop
            name: Human-readable name for logging
        """
        self._processor = processor
        self._name = name
        self._queue: asyncio.Queue[T] = asyncio.Queue()
        self._worker_task: asyncio.Task | None = None
        self._running = False

        logger.debug(f"Created {self._name}")

    async def start(self) -> None:
        if self._running:
            logger.warning(f"{self._name} already running")
            return

        self._running = True
        self._worker_task = asyncio.create_task(self._worker())
        logger.info(f"{self._name} started")

    async def stop(self) -> None:
        """Cancel the worker and wait for it; pending items are dropped."""
        if not self._running:
            return

        self._running = False
        logger.info(f"Stopping {self._name}...")

        if self._worker_task and not self._worker_task.done():
            self._worker_task.cancel()
            try:
                await self._worker_task
            except asyncio.CancelledError:
                logger.info(f"{self._name} worker cancelled successfully")

        logger.info(f"{self._name} stopped")

    async def enqueue(self, item: T) -> None:
        """
        Enqueue an item for processing.

        Raises:
            RuntimeError: If the processor is not running. Call start() first.
        """
        if not self._running:
            raise RuntimeError(f"{self._name} is not running. Call start() first.")

        await self._queue.put(item)
        logger.debug(f"{self._name}: Enqueued item (queue_size={self._queue.qsize()})")

    def enqueue_nowait(self, item: T) -> None:
        """Non-blocking ``enqueue`` for synchronous callers on the event loop."""
        if not self._running:
            raise RuntimeError(f"{self._name} is not running. Call start() first.")

        self._queue.put_nowait(item)
        logger.debug(f"{self._name}: Enqueued item (queue_size={self._queue.qsize()})")

    @property
    def is_running(self) -> bool:
        return self._running

    async def _worker(self) -> None:
        logger.info(f"{self._name} worker started")

        while self._running:
            try:
                item = await self._queue.get()

                try:
                    self._processor(item)
                except Exception as e:
                    logger.exception(f"Error in {self._name} processor: {e}")

                self._queue.task_done()

            except asyncio.CancelledError:
                logger.info(f"{self._name} worker task cancelled")
                break

        logger.info(f"{self._name} worker stopped")

    async def wait_until_empty(self) -> None:
        """Wait until all queued items have been processed."""
        await self._queue.join()
