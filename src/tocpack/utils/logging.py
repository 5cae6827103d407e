"""Shared Loguru + Rich logging configuration for tocpack."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
)
from rich.traceback import install as tr_install

if TYPE_CHECKING:
    from loguru._logger import Logger

TRACE_FORMAT = "{time:HH:mm:ss.SSS}|{level:^8}| Module:{module} \
| {function} | Line {line:^5}|{message}"

_console: Console | None = None
_configured = False


def get_console(console: Console | None = None) -> Console:
    """Return the stderr console shared by logging and progress output."""
    global _console
    if console is not None:
        _console = console
    if _console is None:
        _console = Console(stderr=True)
        tr_install(console=_console)
    return _console


def get_progress(console: Console | None = None) -> Progress:
    """Create a Rich Progress instance using the provided console."""
    if console is None:
        console = get_console()
    return Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=None),
        TimeElapsedColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    )


def configure_logging(
    log_path: Path | str | None = None,
    level: str = "INFO",
    trace_level: str = "TRACE",
    console: Console | None = None,
) -> Logger:
    """(Re)configure Loguru with a Rich console sink and an optional file sink.

    Args:
        log_path: File path for trace logs. No file sink when `None`.
        level: Console log level.
        trace_level: File sink level.
        console: Console for the Rich sink. Defaults to the shared stderr console.
    Returns:
        Configured Loguru logger.
    """
    global _configured
    console = get_console(console)

    logger.remove()
    if log_path is not None:
        logger.add(
            str(log_path),
            level=trace_level,
            mode="a",
            colorize=False,
            format=TRACE_FORMAT,
        )
    logger.add(
        RichHandler(level=level, markup=True, rich_tracebacks=True, console=console),
        level=level,
        format="{message}",
        backtrace=False,
        diagnose=False,
    )
    _configured = True
    return logger  # type: ignore


def get_logger() -> Logger:
    """Return the package logger, configuring the default sinks on first use."""
    if not _configured:
        return configure_logging()
    return logger  # type: ignore
