"""Display sink protocol.

The controller is the only component that drives a sink; the Textual app
implements it, tests use a recording fake.
"""

from typing import Protocol

from ijq.domain.types import InputStyle


class DisplaySink(Protocol):
    """Everything the controller needs from the screen."""

    def set_output(self, text: str) -> None:
        """Replace the output pane with ``text`` (may contain ANSI colour)."""
        ...

    def set_error(self, text: str) -> None:
        """Replace the error pane; an empty string clears it."""
        ...

    def set_preview(self, text: str) -> None:
        """Show the document itself in the input pane."""
        ...

    def set_input_style(self, style: InputStyle) -> None:
        ...

    def request_redraw(self) -> None:
        """Re-render, including any open suggestion list."""
        ...

    def input_text(self) -> str:
        """The filter text currently in the input field."""
        ...

    def rendered_output(self) -> str:
        """The output pane as plain text, colour removed."""
        ...
