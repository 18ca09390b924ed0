"""The loaded input document.

A single ``Document`` is created at startup and never mutated; background
evaluations read it concurrently without synchronization.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Sequence

from ijq.config import Configuration
from ijq.domain.errors import DocumentError
from ijq.logger import get_logger
from ijq.utils import stdin_has_data

logger = get_logger("document")


@dataclass(frozen=True)
class Document:
    """Raw input text plus the configuration it is evaluated with."""

    text: str
    configuration: Configuration

    @classmethod
    def read(
        cls,
        configuration: Configuration,
        files: Sequence[str] = (),
        stdin: IO[str] | None = None,
    ) -> "Document":
        """
        Build the document from files or standard input.

        With null input nothing is read. When several files are given they are
        read in order and the last one becomes the document text.

        Args:
            configuration: Active evaluation configuration
            files: Input file paths
            stdin: Stream to read when no files are given. If None, reads
                ``sys.stdin`` provided it is not a terminal.

        Raises:
            DocumentError: If a file cannot be read or there is nothing on stdin
        """
        if configuration.null_input:
            logger.debug("Null input configured, document is empty")
            return cls(text="", configuration=configuration)

        if files:
            text = ""
            for filename in files:
                text = cls._read_file(filename)
            return cls(text=text, configuration=configuration)

        if stdin is None:
            if not stdin_has_data():
                raise DocumentError("no data on stdin")
            stdin = sys.stdin

        try:
            text = stdin.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentError(f"cannot read stdin: {e}") from e

        logger.info(f"Read {len(text)} characters from stdin")
        return cls(text=text, configuration=configuration)

    @staticmethod
    def _read_file(filename: str) -> str:
        try:
            text = Path(filename).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentError(f"{filename}: {e}") from e
        logger.info(f"Read {len(text)} characters from {filename}")
        return text
