"""Evaluation configuration and runtime settings.

``Configuration`` is built once from the command line and is immutable
afterwards; it is shared freely between the UI loop and background
evaluations. ``Settings`` collects the environment-driven knobs.
"""

import os
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from ijq.utils import get_data_dir


def default_history_path() -> str:
    """Default location of the history file (``<data dir>/history``)."""
    return os.path.join(get_data_dir(), "history")


class Configuration(BaseModel):
    """Flags passed through to every jq invocation."""

    compact: bool = Field(False, description="compact instead of pretty-printed output")
    null_input: bool = Field(False, description="use `null` as the single input value")
    slurp: bool = Field(False, description="read all inputs into an array and apply the filter to it")
    raw_output: bool = Field(False, description="output raw strings, not JSON texts")
    raw_input: bool = Field(False, description="read raw strings, not JSON texts")
    monochrome: bool = Field(False, description="don't colorize JSON")
    sort_keys: bool = Field(False, description="sort keys of objects on output")
    history_path: str = Field(default_factory=default_history_path, description="history file, '' disables")

    model_config = ConfigDict(frozen=True)

    def to_args(self) -> list[str]:
        """
        Translate the configuration into jq command-line flags.

        Returns:
            Flags in a fixed order; the filter expression is appended by the engine.
        """
        args: list[str] = []
        if self.compact:
            args.append("-c")
        if self.null_input:
            args.append("-n")
        if self.slurp:
            args.append("-s")
        if self.raw_output:
            args.append("-r")
        if self.raw_input:
            args.append("-R")
        if not self.monochrome:
            args.append("-C")
        if self.sort_keys:
            args.append("-S")
        return args

    @property
    def history_enabled(self) -> bool:
        return self.history_path != ""


@dataclass(frozen=True)
class Settings:
    """Runtime knobs read from the environment (optionally via a .env file)."""

    jq_path: str = "jq"
    log_level: str = "INFO"
    log_file: str | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        debug = os.getenv("IJQ_DEBUG", "false").lower() == "true"
        log_level = "DEBUG" if debug else os.getenv("IJQ_LOG_LEVEL", "INFO").upper()
        return cls(
            jq_path=os.getenv("IJQ_JQ_PATH", "jq") or "jq",
            log_level=log_level,
            log_file=os.getenv("IJQ_LOG_FILE") or None,
        )
