"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from sweep.core.errors import ErrorCode
from sweep.output.errors import cleanup_error_exit_code, print_cleanup_error

if TYPE_CHECKING:
    from sweep.output.console import ConsoleProtocol
    from sweep.services.cleanup.errors import CleanupError


def exit_with_cleanup_error(error: CleanupError, console: ConsoleProtocol) -> NoReturn:
    """Print ``error`` and exit with its mapped code."""
    print_cleanup_error(error, console)
    raise typer.Exit(code=cleanup_error_exit_code(error))


def exit_user_error(message: str, console: ConsoleProtocol, hint: str | None = None) -> NoReturn:
    console.error(message)
    if hint:
        console.print(f"hint: {hint}")
    raise typer.Exit(code=int(ErrorCode.USER_ERROR))
