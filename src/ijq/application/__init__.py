"""Application layer: the reactive controller, suggestions and history."""

from ijq.application.controller import ReactiveController
from ijq.application.history import History
from ijq.application.suggestions import SuggestionService

__all__ = [
    "ReactiveController",
    "History",
    "SuggestionService",
]
