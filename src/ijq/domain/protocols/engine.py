"""Evaluation engine protocol."""

from typing import Protocol

from ijq.config import Configuration
from ijq.domain.types import EvaluationResult


class EvaluationEngine(Protocol):
    """Runs one filter against one document.

    Implementations return ``Failure`` for a bad filter and raise
    ``EngineUnavailableError`` when the engine cannot be started at all.
    """

    async def evaluate(
        self,
        document_text: str,
        filter_text: str,
        configuration: Configuration,
    ) -> EvaluationResult:
        ...
