"""Value types shared between the engine, the controller and the UI."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ijq.domain.document import Document


@dataclass(frozen=True)
class Success:
    """jq exited with status 0; ``output`` is the formatted result."""

    output: str


@dataclass(frozen=True)
class Failure:
    """jq exited non-zero; ``diagnostic`` is jq's own message, verbatim."""

    diagnostic: str


EvaluationResult = Union[Success, Failure]


@dataclass(frozen=True)
class EvaluationRequest:
    """A filter to evaluate against a document snapshot and its configuration."""

    filter_text: str
    document: Document


@dataclass(frozen=True)
class SequencedResult:
    """An evaluation result tagged with the sequence number of its request."""

    sequence: int
    filter_text: str
    result: EvaluationResult


class InputStyle(str, Enum):
    """Visual state of the filter input field."""

    NORMAL = "normal"
    ERROR = "error"


@dataclass(frozen=True)
class CommitResult:
    """What a commit wrote out."""

    filter_text: str
    output: str
    recorded: bool
