"""
IjqApp - Textual application for interactive jq.
"""

import asyncio

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Input

from ijq.application.controller import ReactiveController
from ijq.application.history import History
from ijq.domain.document import Document
from ijq.domain.events import CompletionRequested, EventBus, FilterChanged
from ijq.domain.protocols import EvaluationEngine
from ijq.domain.types import InputStyle
from ijq.logger import get_logger
from ijq.presentation.widgets import (
    ErrorPane,
    FilterAutoComplete,
    FilterInput,
    InputPane,
    OutputPane,
)

logger = get_logger("ijq_tui")


class IjqApp(App[bool]):
    """
    The ijq TUI. Also the controller's display sink.

    Layout:
    ┌───────────────────┬───────────────────┐
    │       Input       │      Output       │
    │    (document)     │  (filter result)  │
    ├───────────────────┴───────────────────┤
    │           Filter (+ dropdown)         │
    ├───────────────────────────────────────┤
    │                Error                  │
    └───────────────────────────────────────┘

    The app exits with result True when the filter is committed (Enter),
    and False when the user quits.
    """

    TITLE = "ijq"

    CSS_PATH = "styles.tcss"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True, show=False),
        Binding("ctrl+q", "quit", "Quit", priority=True, show=False),
        Binding("shift+down", "focus_filter", "Filter", show=False),
    ]

    def __init__(
        self,
        engine: EvaluationEngine,
        document: Document,
        history: History,
        initial_filter: str = ".",
        event_bus: EventBus | None = None,
    ):
        """
        Args:
            engine: Evaluation engine (normally JqEngine)
            document: The loaded document
            history: Committed filters
            initial_filter: Filter shown and evaluated at startup
            event_bus: Optional EventBus shared with the controller
        """
        super().__init__()
        self.event_bus = event_bus or EventBus()
        self.initial_filter = initial_filter
        self.controller = ReactiveController(
            engine=engine,
            document=document,
            sink=self,
            history=history,
            event_bus=self.event_bus,
        )
        self._input_text = initial_filter
        self._rendered_output = ""
        self._startup_tasks: set[asyncio.Task] = set()

    def compose(self) -> ComposeResult:
        with Horizontal(id="documents"):
            yield InputPane(id="input-pane")
            yield OutputPane(id="output-pane")
        filter_input = FilterInput(value=self.initial_filter, id="filter")
        with Horizontal(id="filter-row"):
            yield filter_input
        with Horizontal(id="error-row"):
            yield ErrorPane(id="error-pane")
        yield FilterAutoComplete(filter_input, completer=self.controller.complete)

    async def on_mount(self) -> None:
        logger.info("ijq TUI mounted")
        await self.controller.start()

        task = asyncio.create_task(self.controller.load_preview())
        self._startup_tasks.add(task)
        task.add_done_callback(self._startup_tasks.discard)

        self.controller.filter_changed(self.initial_filter)
        self.query_one("#filter", FilterInput).focus()

    async def on_unmount(self) -> None:
        await self.controller.stop()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "filter":
            return
        self._input_text = event.value
        self.event_bus.publish(FilterChanged(text=event.value))
        self.event_bus.publish(CompletionRequested(text=event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "filter":
            return
        self._input_text = event.value
        logger.info("Filter committed")
        self.exit(True)

    def action_quit(self) -> None:
        self.exit(False)

    def action_focus_filter(self) -> None:
        self.query_one("#filter", FilterInput).focus()

    def action_focus_input_pane(self) -> None:
        self.query_one("#input-pane", InputPane).focus()

    def action_focus_output(self) -> None:
        self.query_one("#output-pane", OutputPane).focus()

    # DisplaySink

    def set_output(self, text: str) -> None:
        pane = self.query_one("#output-pane", OutputPane)
        pane.show(text)
        self._rendered_output = pane.plain

    def set_error(self, text: str) -> None:
        self.query_one("#error-pane", ErrorPane).show(text)

    def set_preview(self, text: str) -> None:
        self.query_one("#input-pane", InputPane).show(text)

    def set_input_style(self, style: InputStyle) -> None:
        self.query_one("#filter", FilterInput).set_style(style)

    def request_redraw(self) -> None:
        fatal = self.controller.fatal_error
        if fatal is not None:
            self.exit(False, return_code=1)
            return
        for autocomplete in self.query(FilterAutoComplete):
            autocomplete.refresh_candidates()
        self.refresh()

    def input_text(self) -> str:
        return self._input_text

    def rendered_output(self) -> str:
        return self._rendered_output
