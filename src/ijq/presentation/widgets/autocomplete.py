"""
Suggestion dropdown for the filter input.
"""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual_autocomplete import AutoComplete, DropdownItem, TargetState

from ijq.logger import get_logger
from ijq.presentation.widgets.filter_input import FilterInput

logger = get_logger("filter_autocomplete")

Completer = Callable[[str], list[str]]


class FilterAutoComplete(AutoComplete):
    """Overlay listing history entries and document paths for the filter."""

    def __init__(self, input_widget: FilterInput, completer: Completer, **kwargs):
        """
        Args:
            input_widget: The filter input this dropdown completes
            completer: Returns candidates for the full input text, immediately
        """
        self._completer = completer
        super().__init__(
            target=input_widget,
            candidates=self._collect_candidates,
            prevent_default_enter=True,
            **kwargs,
        )

    def _collect_candidates(self, state: TargetState) -> list[DropdownItem]:
        candidates = [DropdownItem(main=value) for value in self._completer(state.text)]
        logger.debug(f"Collected {len(candidates)} completion candidates")
        return candidates

    def apply_completion(self, value: str, state: TargetState) -> None:
        # Assigning posts Input.Changed, so the completed filter is evaluated
        self.target.value = value
        self.target.cursor_position = len(value)
        logger.debug(f"Applied completion '{value}'")

    def should_show_dropdown(self, search_string: str) -> bool:
        """Show whenever there is something to pick, including on an empty filter."""
        option_list = self.option_list
        option_count = option_list.option_count
        if option_count == 0:
            return False
        if option_count == 1:
            prompt = option_list.get_option_at_index(0).prompt
            text = prompt.plain if isinstance(prompt, Text) else str(prompt)
            return text != self.target.value
        return True

    def refresh_candidates(self) -> None:
        """Rebuild the dropdown after new suggestions were cached."""
        if not self.target.has_focus:
            return
        self._target_state = self._get_target_state()
        search_string = self.get_search_string(self._target_state)
        self._rebuild_options(self._target_state, search_string)
        self._align_to_target()
