"""jq subprocess engine.

One ``jq`` process per evaluation: flags from the configuration, then the
filter as the only positional argument. The document is streamed through
stdin; stdout and stderr are captured as one stream because jq reports
filter errors in human-readable text that is shown to the user verbatim.
"""

import asyncio

from ijq.config import Configuration
from ijq.domain.errors import EngineUnavailableError
from ijq.domain.types import EvaluationResult, Failure, Success
from ijq.logger import get_logger
from ijq.utils import shorten

logger = get_logger("engine.jq")


class JqEngine:
    """Evaluates filters by running the jq executable."""

    def __init__(self, executable: str = "jq"):
        """
        Initialize the engine.

        Args:
            executable: jq binary name or path (resolved through PATH)
        """
        self.executable = executable

    def build_command(self, filter_text: str, configuration: Configuration) -> list[str]:
        """Full argv for one evaluation; no file arguments, input is always streamed."""
        return [self.executable, *configuration.to_args(), filter_text]

    async def evaluate(
        self,
        document_text: str,
        filter_text: str,
        configuration: Configuration,
    ) -> EvaluationResult:
        """
        Run ``filter_text`` against ``document_text``.

        Returns:
            Success with jq's output on exit status 0, otherwise Failure with
            whatever jq printed

        Raises:
            EngineUnavailableError: If the process cannot be spawned
        """
        command = self.build_command(filter_text, configuration)
        returncode, data = await self._run(command, document_text.encode("utf-8"))
        text = data.decode("utf-8", errors="replace")

        if returncode != 0:
            logger.debug(f"jq exited {returncode} for filter '{shorten(filter_text)}'")
            return Failure(diagnostic=text)

        logger.debug(f"jq produced {len(text)} characters for filter '{shorten(filter_text)}'")
        return Success(output=text)

    async def ensure_available(self) -> str:
        """
        Check that jq can be started.

        Returns:
            The version string reported by jq

        Raises:
            EngineUnavailableError: If jq is missing or exits with an error
        """
        returncode, data = await self._run([self.executable, "--version"], b"")
        version = data.decode("utf-8", errors="replace").strip()
        if returncode != 0:
            raise EngineUnavailableError(self.executable, version or f"exit status {returncode}")
        logger.info(f"Using {self.executable} ({version})")
        return version

    async def _run(self, command: list[str], input_data: bytes) -> tuple[int, bytes]:
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            logger.error(f"Failed to start {command[0]}: {e}")
            raise EngineUnavailableError(command[0], e.strerror or str(e)) from e

        # communicate() tolerates jq exiting before it has read all of its input
        stdout, _ = await process.communicate(input_data)

        assert process.returncode is not None
        return process.returncode, stdout
