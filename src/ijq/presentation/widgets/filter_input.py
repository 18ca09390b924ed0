"""
FilterInput - the field the user edits the jq filter in.
"""

from textual.binding import Binding
from textual.widgets import Input

from ijq.domain.types import InputStyle
from ijq.logger import get_logger

logger = get_logger("filter_input")


class FilterInput(Input):
    """
    Input for the filter expression.

    Turns red while the current filter fails to evaluate. ``ctrl+n`` and
    ``ctrl+p`` move through the suggestion dropdown, ``shift+up`` leaves for
    the input pane.
    """

    BORDER_TITLE = "Filter"

    BINDINGS = [
        Binding("ctrl+n", "suggestion_next", "Next suggestion", show=False),
        Binding("ctrl+p", "suggestion_previous", "Previous suggestion", show=False),
        Binding("shift+up", "app.focus_input_pane", "Input", show=False),
    ]

    def __init__(self, value: str = ".", **kwargs):
        super().__init__(value=value, placeholder="jq filter", **kwargs)
        self.border_title = self.BORDER_TITLE

    def set_style(self, style: InputStyle) -> None:
        self.set_class(style is InputStyle.ERROR, "-error")

    @property
    def has_error_style(self) -> bool:
        return self.has_class("-error")

    def action_suggestion_next(self) -> None:
        self._move_suggestion("cursor_down")

    def action_suggestion_previous(self) -> None:
        self._move_suggestion("cursor_up")

    def _move_suggestion(self, action: str) -> None:
        from ijq.presentation.widgets.autocomplete import FilterAutoComplete

        for autocomplete in self.screen.query(FilterAutoComplete):
            if autocomplete.target is self and autocomplete.display:
                getattr(autocomplete.option_list, f"action_{action}")()
                return
