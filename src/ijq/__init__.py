"""ijq - interactive jq."""

__version__ = "0.1.0"
