"""Evaluation engine backed by the jq executable."""

from ijq.infrastructure.engine.jq import JqEngine

__all__ = ["JqEngine"]
