"""
ReactiveController - turns filter edits into evaluations and owns the display.

Every filter change gets the next sequence number and is evaluated in its
own background task. Finished evaluations (and suggestion lookups) are
handed to a single FIFO result channel whose consumer runs on the UI event
loop; that consumer is the only code that touches the display sink.

A result is applied only if its sequence number is greater than the last
applied one, so a slow evaluation for an older filter can never overwrite
the output of a newer one, regardless of completion order.
"""

import asyncio
from typing import IO, Union

from ijq.domain.document import Document
from ijq.domain.errors import EngineUnavailableError
from ijq.domain.events import CompletionRequested, EventBus, FilterChanged, SuggestionsReady
from ijq.domain.protocols import DisplaySink, EvaluationEngine
from ijq.domain.types import CommitResult, EvaluationRequest, Failure, InputStyle, SequencedResult, Success
from ijq.logger import get_logger
from ijq.utils import shorten

from .history import History
from .queue_processor import AsyncQueueProcessor
from .suggestions import SuggestionService

logger = get_logger("controller")

ControllerMessage = Union[SequencedResult, SuggestionsReady]


class ReactiveController:
    """
    Single authority over what is displayed.

    State:
        next sequence number to hand out, the sequence number of the last
        result actually applied, and the last successful output.
    """

    def __init__(
        self,
        engine: EvaluationEngine,
        document: Document,
        sink: DisplaySink,
        history: History,
        event_bus: EventBus | None = None,
        suggestions: SuggestionService | None = None,
    ):
        """
        Initialize the controller.

        Args:
            engine: Engine evaluating filters
            document: The loaded document; its configuration drives evaluation flags
            sink: Display the controller drives
            history: Committed filters
            event_bus: Bus to subscribe to FilterChanged/CompletionRequested on.
                A new one is created if None.
            suggestions: Suggestion service. Created over ``engine`` and
                ``history`` if None.
        """
        self.engine = engine
        self.document = document
        self.sink = sink
        self.history = history
        self.event_bus = event_bus or EventBus()
        self.suggestions = suggestions or SuggestionService(engine, document, history)
        self.suggestions.on_ready = self._on_suggestions_ready

        self._next_sequence = 0
        self._last_applied = -1
        self._output = ""
        self._tasks: set[asyncio.Task] = set()
        self._fatal: EngineUnavailableError | None = None

        self._results = AsyncQueueProcessor[ControllerMessage](
            processor=self._apply,
            name="ResultQueue",
        )

        self.event_bus.subscribe(FilterChanged, self._handle_filter_changed)
        self.event_bus.subscribe(CompletionRequested, self._handle_completion_requested)

    @property
    def last_applied(self) -> int:
        """Sequence number of the result currently on display (-1 before any)."""
        return self._last_applied

    @property
    def output(self) -> str:
        """Output of the last applied successful evaluation."""
        return self._output

    @property
    def fatal_error(self) -> EngineUnavailableError | None:
        """Set if jq disappeared during the session."""
        return self._fatal

    async def start(self) -> None:
        await self._results.start()

    async def stop(self) -> None:
        await self._results.stop()

    async def drain(self) -> None:
        """Wait until every in-flight evaluation and lookup has been applied."""
        while self._tasks or self.suggestions.pending:
            if self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
            await self.suggestions.wait_idle()
        await self._results.wait_until_empty()

    # Event handlers

    def _handle_filter_changed(self, event: FilterChanged) -> None:
        self.filter_changed(event.text)

    def _handle_completion_requested(self, event: CompletionRequested) -> None:
        self.complete(event.text)

    # Operations

    def filter_changed(self, text: str) -> int:
        """
        Start evaluating ``text`` in the background.

        Returns:
            The sequence number allocated to this evaluation
        """
        sequence = self._next_sequence
        self._next_sequence += 1

        request = EvaluationRequest(filter_text=text, document=self.document)
        task = asyncio.create_task(self._evaluate(sequence, request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug(f"Evaluation #{sequence} scheduled for '{shorten(text)}'")
        return sequence

    def complete(self, text: str) -> list[str]:
        """Suggestion candidates for ``text``; may trigger a background lookup."""
        return self.suggestions.complete(text)

    async def load_preview(self) -> None:
        """Show the document itself (filter ``.``) in the input pane."""
        try:
            result = await self.engine.evaluate(self.document.text, ".", self.document.configuration)
        except EngineUnavailableError as e:
            self._fatal = e
            logger.error(f"Preview failed: {e}")
            self.sink.request_redraw()
            return

        if isinstance(result, Success):
            self.sink.set_preview(result.output)
        else:
            logger.warning("Document preview failed; showing jq diagnostic instead")
            self.sink.set_preview(result.diagnostic)

    def commit(self, stdout: IO[str], stderr: IO[str]) -> CommitResult:
        """
        Write the current output and filter, and record the filter in history.

        The output goes to ``stdout`` and the filter expression to ``stderr``
        so it can be captured for reuse.
        """
        expression = self.sink.input_text()
        output = self.sink.rendered_output()

        stderr.write(expression + "\n")
        stderr.flush()
        stdout.write(output)
        stdout.flush()

        recorded = False
        if expression and not self.history.contains(expression):
            recorded = self.history.record(expression)

        logger.info(f"Committed filter '{shorten(expression)}' (recorded={recorded})")
        return CommitResult(filter_text=expression, output=output, recorded=recorded)

    # Background work

    async def _evaluate(self, sequence: int, request: EvaluationRequest) -> None:
        document = request.document
        try:
            result = await self.engine.evaluate(document.text, request.filter_text, document.configuration)
        except EngineUnavailableError as e:
            self._fatal = e
            logger.error(f"Evaluation #{sequence} could not run: {e}")
            result = Failure(diagnostic=str(e))

        if not self._results.is_running:
            logger.debug(f"Dropping evaluation #{sequence}: controller stopped")
            return
        await self._results.enqueue(SequencedResult(sequence=sequence, filter_text=request.filter_text, result=result))

    def _on_suggestions_ready(self, prefix: str, candidates: list[str]) -> None:
        event = SuggestionsReady(prefix=prefix, count=len(candidates))
        if self._results.is_running:
            self._results.enqueue_nowait(event)
        self.event_bus.publish(event)

    # Result channel consumer

    def _apply(self, message: ControllerMessage) -> None:
        if isinstance(message, SuggestionsReady):
            self.sink.request_redraw()
            return

        if message.sequence <= self._last_applied:
            logger.debug(
                f"Discarding stale evaluation #{message.sequence} "
                f"(last applied #{self._last_applied})"
            )
            return

        result = message.result
        if isinstance(result, Success):
            self._output = result.output
            self.sink.set_output(result.output)
            self.sink.set_error("")
            self.sink.set_input_style(InputStyle.NORMAL)
        else:
            # The last good output stays on screen
            self.sink.set_input_style(InputStyle.ERROR)
            self.sink.set_error(result.diagnostic)

        self._last_applied = message.sequence
        self.sink.request_redraw()
