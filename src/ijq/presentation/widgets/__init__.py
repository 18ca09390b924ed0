"""Widgets for the ijq TUI."""

from ijq.presentation.widgets.autocomplete import FilterAutoComplete
from ijq.presentation.widgets.filter_input import FilterInput
from ijq.presentation.widgets.panes import AnsiPane, ErrorPane, InputPane, OutputPane

__all__ = [
    "AnsiPane",
    "ErrorPane",
    "FilterAutoComplete",
    "FilterInput",
    "InputPane",
    "OutputPane",
]
