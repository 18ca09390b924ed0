"""
Scrollable text panes for jq output.

jq colours its output with ANSI escapes (``-C``); the panes render them with
rich and keep the plain text around for committing.
"""

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Static


class AnsiPane(VerticalScroll, can_focus=True):
    """A bordered, focusable pane showing ANSI-coloured text."""

    BORDER_TITLE = ""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.border_title = self.BORDER_TITLE
        self._plain = ""

    def compose(self) -> ComposeResult:
        yield Static("", classes="pane-body", markup=False)

    def show(self, text: str) -> None:
        """Replace the pane content and scroll back to the top."""
        rendered = Text.from_ansi(text)
        self._plain = rendered.plain
        if text.endswith("\n") and not self._plain.endswith("\n"):
            self._plain += "\n"
        self.query_one(".pane-body", Static).update(rendered)
        self.scroll_home(animate=False)

    @property
    def plain(self) -> str:
        """Current content without colour."""
        return self._plain


class InputPane(AnsiPane):
    """The document itself."""

    BORDER_TITLE = "Input"

    BINDINGS = [
        Binding("right", "app.focus_output", "Output", show=False),
    ]


class OutputPane(AnsiPane):
    """The result of the current filter."""

    BORDER_TITLE = "Output"

    BINDINGS = [
        Binding("left", "app.focus_input_pane", "Input", show=False),
    ]


class ErrorPane(AnsiPane, can_focus=False):
    """jq's diagnostic for the current filter, empty when it succeeds."""

    BORDER_TITLE = "Error"
