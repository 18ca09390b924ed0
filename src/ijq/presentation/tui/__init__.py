"""TUI application built with Textual."""

from ijq.presentation.tui.ijq_app import IjqApp

__all__ = ["IjqApp"]
