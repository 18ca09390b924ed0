"""Shared fakes and fixtures."""

import asyncio
import shutil
from typing import Callable, Optional

import pytest

from ijq.application.history import History
from ijq.config import Configuration
from ijq.domain.document import Document
from ijq.domain.types import EvaluationResult, Failure, InputStyle, Success

jq_available = pytest.mark.skipif(shutil.which("jq") is None, reason="jq is not installed")


class ScriptedEngine:
    """Engine returning canned results, optionally holding a filter until released."""

    def __init__(
        self,
        responses: Optional[dict[str, EvaluationResult]] = None,
        default: Optional[Callable[[str], EvaluationResult]] = None,
    ):
        """
        Args:
            responses: Result per filter text
            default: Result for filters not in ``responses``; jq-like failure if None
        """
        self.responses = responses or {}
        self.default = default or (lambda text: Failure(diagnostic=f"jq: error: cannot evaluate {text}\n"))
        self.calls: list[tuple[str, str, Configuration]] = []
        self._gates: dict[str, asyncio.Event] = {}

    def hold(self, filter_text: str) -> asyncio.Event:
        """Block evaluations of ``filter_text`` until the returned event is set."""
        gate = asyncio.Event()
        self._gates[filter_text] = gate
        return gate

    def filters(self) -> list[str]:
        return [call[1] for call in self.calls]

    async def evaluate(self, document_text: str, filter_text: str, configuration: Configuration) -> EvaluationResult:
        self.calls.append((document_text, filter_text, configuration))
        gate = self._gates.get(filter_text)
        if gate is not None:
            await gate.wait()
        await asyncio.sleep(0)
        if filter_text in self.responses:
            return self.responses[filter_text]
        return self.default(filter_text)


class RecordingSink:
    """Display sink that remembers every call."""

    def __init__(self, text: str = "."):
        self.text = text
        self.outputs: list[str] = []
        self.errors: list[str] = []
        self.previews: list[str] = []
        self.styles: list[InputStyle] = []
        self.redraws = 0

    def set_output(self, text: str) -> None:
        self.outputs.append(text)

    def set_error(self, text: str) -> None:
        self.errors.append(text)

    def set_preview(self, text: str) -> None:
        self.previews.append(text)

    def set_input_style(self, style: InputStyle) -> None:
        self.styles.append(style)

    def request_redraw(self) -> None:
        self.redraws += 1

    def input_text(self) -> str:
        return self.text

    def rendered_output(self) -> str:
        return self.outputs[-1] if self.outputs else ""


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Poll ``predicate`` on the event loop until it holds."""

    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.005)

    await asyncio.wait_for(_poll(), timeout=timeout)


@pytest.fixture
def configuration():
    return Configuration(monochrome=True, history_path="")


@pytest.fixture
def document(configuration):
    return Document(text='{"a": 1, "b": 2}', configuration=configuration)


@pytest.fixture
def history():
    return History(path="")


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def object_engine():
    """Engine that knows the document {"a": 1, "b": 2}."""
    return ScriptedEngine(
        responses={
            ".": Success(output='{\n  "a": 1,\n  "b": 2\n}\n'),
            ".a": Success(output="1\n"),
            ".b": Success(output="2\n"),
            "[.[] | objects | keys[]] | unique": Success(output='["a","b"]\n'),
        }
    )
