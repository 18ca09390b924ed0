"""Command-line entry point.

Everything that can go wrong before the interactive session (no input,
unreadable files, missing jq) is reported here and ends the process with
status 1. Once the UI is running, errors are contained by the controller.
"""

import asyncio
import os
import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from ijq import __version__
from ijq.application.history import History
from ijq.config import Configuration, Settings, default_history_path
from ijq.domain.document import Document
from ijq.domain.errors import DocumentError, EngineUnavailableError, UsageError
from ijq.infrastructure.engine import JqEngine
from ijq.logger import get_logger, setup_logger
from ijq.presentation.tui import IjqApp
from ijq.utils import reattach_terminal, stdin_has_data

logger = get_logger("cli")

cli = typer.Typer(
    name="ijq",
    help="ijq - interactive jq",
    epilog="""
    Usage: ijq [-cnsrRMSV] [-f file] [filter] [files ...]
    """,
    add_completion=False,
)


def resolve_filter(
    args: list[str],
    filter_file: Optional[str],
    null_input: bool,
    stdin_piped: bool,
) -> tuple[str, list[str]]:
    """
    Split positional arguments into the initial filter and input files.

    With ``-f`` every positional is a file. Otherwise the first positional is
    the filter when there is more than one, or when the input comes from
    stdin or ``-n``; a lone positional is an input file.

    Returns:
        (filter, files); the filter defaults to ``.``

    Raises:
        DocumentError: If the filter file cannot be read
        UsageError: If there is no input source at all
    """
    if filter_file:
        try:
            contents = Path(filter_file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentError(f"{filter_file}: {e}") from e
        return contents.rstrip("\n"), list(args)

    if len(args) > 1 or (args and (stdin_piped or null_input)):
        return args[0], list(args[1:])

    if not args and not stdin_piped and not null_input:
        raise UsageError("no input: pass files, pipe data on stdin, or use -n")

    return ".", list(args)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ijq {__version__}")
        raise typer.Exit()


def _fail(message: str) -> None:
    logger.error(message)
    typer.echo(f"ijq: {message}", err=True)
    raise typer.Exit(1)


@cli.command()
def main(
    ctx: typer.Context,
    args: Optional[list[str]] = typer.Argument(None, metavar="[filter] [files ...]", show_default=False),
    compact: bool = typer.Option(False, "-c", help="compact instead of pretty-printed output"),
    null_input: bool = typer.Option(False, "-n", help="use `null` as the single input value"),
    slurp: bool = typer.Option(False, "-s", help="read (slurp) all inputs into an array; apply filter to it"),
    raw_output: bool = typer.Option(False, "-r", help="output raw strings, not JSON texts"),
    raw_input: bool = typer.Option(False, "-R", help="read raw strings, not JSON texts"),
    monochrome: bool = typer.Option(False, "-M", help="don't colorize JSON"),
    sort_keys: bool = typer.Option(False, "-S", help="sort keys of objects on output"),
    history_file: str = typer.Option(
        default_history_path(),
        "-H",
        metavar="PATH",
        help="set path to history file. Set to '' to disable history.",
    ),
    filter_file: Optional[str] = typer.Option(None, "-f", metavar="filename", help="read initial filter from filename"),
    version: bool = typer.Option(
        False, "-V", callback=_version_callback, is_eager=True, help="print version and exit"
    ),
):
    """Interactive jq: edit a filter and watch the output update live."""
    load_dotenv()
    settings = Settings.from_env()
    setup_logger(log_file=settings.log_file, log_level=settings.log_level)

    configuration = Configuration(
        compact=compact,
        null_input=null_input,
        slurp=slurp,
        raw_output=raw_output,
        raw_input=raw_input,
        monochrome=monochrome,
        sort_keys=sort_keys,
        history_path=history_file,
    )
    logger.info(f"Starting ijq {__version__} with flags {configuration.to_args()}")

    stdin_piped = stdin_has_data()
    try:
        filter_text, files = resolve_filter(args or [], filter_file, null_input, stdin_piped)
    except UsageError as e:
        logger.info(f"Usage error: {e}")
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(1)
    except DocumentError as e:
        _fail(str(e))

    if configuration.history_enabled:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(configuration.history_path)), exist_ok=True)
        except OSError as e:
            logger.warning(f"Cannot create history directory: {e}")

    engine = JqEngine(settings.jq_path)
    try:
        asyncio.run(engine.ensure_available())
    except EngineUnavailableError as e:
        _fail(str(e))

    try:
        document = Document.read(configuration, files)
    except DocumentError as e:
        _fail(str(e))

    if not files and not null_input and not reattach_terminal():
        _fail("no terminal available for interactive input")

    history = History.load(configuration.history_path)

    app = IjqApp(engine=engine, document=document, history=history, initial_filter=filter_text)
    committed = app.run()

    if app.controller.fatal_error is not None:
        _fail(str(app.controller.fatal_error))

    if not committed:
        logger.info("Session ended without commit")
        raise typer.Exit(app.return_code or 0)

    app.controller.commit(sys.stdout, sys.stderr)


def run():
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    run()
