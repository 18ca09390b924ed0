"""Domain protocols - the seams between the controller and its collaborators.

Using protocols keeps the controller independent of Textual and of the jq
subprocess, so both can be replaced by fakes in tests.
"""

from ijq.domain.protocols.cache import Cache, K, V
from ijq.domain.protocols.display import DisplaySink
from ijq.domain.protocols.engine import EvaluationEngine

__all__ = [
    "Cache",
    "K",
    "V",
    "DisplaySink",
    "EvaluationEngine",
]
