"""
Error display and exit code helpers for CLI commands.

Commands run their async body through ``run_command``, which maps the
ytreader error taxonomy onto process exit codes and renders failures in a
Rich panel.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ytreader.exceptions import (
    EXIT_CODE_CONFLICT,
    EXIT_CODE_GENERAL_ERROR,
    EXIT_CODE_INTERRUPTED,
    EXIT_CODE_INVALID_ARGS,
    EXIT_CODE_NETWORK_ERROR,
    ConflictError,
    NetworkError,
    ValidationError,
    YtReaderError,
)

console = Console()
logger = logging.getLogger(__name__)

T = TypeVar("T")


def exit_code_for(error: YtReaderError) -> int:
    """
    Map an application error to a CLI exit code.

    >>> exit_code_for(ConflictError("ytreader", "Running"))
    3
    """
    if isinstance(error, ValidationError):
        return EXIT_CODE_INVALID_ARGS
    if isinstance(error, ConflictError):
        return EXIT_CODE_CONFLICT
    if isinstance(error, NetworkError):
        return EXIT_CODE_NETWORK_ERROR
    return EXIT_CODE_GENERAL_ERROR


def exit_code_for_status(status_code: int) -> int:
    """
    Map an HTTP status the server answered with to a CLI exit code.

    Throttling (429) and server errors are network failures worth retrying
    later; any other status is a general error.

    >>> exit_code_for_status(429)
    4
    """
    if status_code == 429 or status_code >= 500:
        return EXIT_CODE_NETWORK_ERROR
    return EXIT_CODE_GENERAL_ERROR


def display_error_panel(error: YtReaderError, title: str = "Error") -> None:
    """Render an application error in a red panel."""
    console.print(
        Panel(
            f"[red]{type(error).__name__}:[/red] {escape(error.message)}",
            title=title,
            border_style="red",
        )
    )


def display_http_status_error(
    error: httpx.HTTPStatusError, title: str = "Error"
) -> None:
    """Render a failed HTTP response with its status and URL in a red panel."""
    response = error.response
    console.print(
        Panel(
            f"[red]HTTP {response.status_code} {escape(response.reason_phrase)}[/red]\n"
            f"URL: {escape(str(error.request.url))}",
            title=title,
            border_style="red",
        )
    )


def run_command(
    operation: Callable[[], Coroutine[Any, Any, T]], title: str = "Command Failed"
) -> T:
    """
    Run an async command body, translating failures into ``typer.Exit``.

    Parameters
    ----------
    operation : Callable[[], Coroutine[Any, Any, T]]
        Zero-argument coroutine factory holding the command body.
    title : str, optional
        Panel title used when the command fails (default: "Command Failed").

    Returns
    -------
    T
        Whatever the command body returned.

    Raises
    ------
    typer.Exit
        With the mapped exit code on an application error, an HTTP error
        status or an interrupt.
    """
    try:
        return asyncio.run(operation())
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(code=EXIT_CODE_INTERRUPTED)
    except YtReaderError as e:
        logger.debug("Command failed", exc_info=True)
        display_error_panel(e, title=title)
        raise typer.Exit(code=exit_code_for(e))
    except httpx.HTTPStatusError as e:
        logger.debug("Command failed", exc_info=True)
        display_http_status_error(e, title=title)
        raise typer.Exit(code=exit_code_for_status(e.response.status_code))
