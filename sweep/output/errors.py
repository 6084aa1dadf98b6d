"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sweep.core.clock import ParseError
from sweep.core.config import ConfigurationError
from sweep.core.errors import ErrorCode
from sweep.output.console import Style
from sweep.platform.shell import ShellExecutionError

if TYPE_CHECKING:
    from sweep.output.console import ConsoleProtocol
    from sweep.services.cleanup.errors import CleanupError

__all__ = ["print_cleanup_error", "cleanup_error_exit_code"]


def print_cleanup_error(error: CleanupError, console: ConsoleProtocol) -> None:
    """Print a cleanup error with its hint."""
    hint: str | None = None
    match error:
        case ConfigurationError(message=message, path=path, hint=hint):
            console.error(f"{message} ({path})" if path else message)
        case ParseError(message=message, hint=hint):
            console.error(message)
        case ShellExecutionError(message=message, command=command, hint=hint):
            console.error(message)
            console.print(f"command: {command}", Style.DIM)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)


def cleanup_error_exit_code(error: CleanupError) -> int:
    match error:
        case ConfigurationError():
            return int(ErrorCode.CONFIG_ERROR)
        case ParseError():
            return int(ErrorCode.PARSE_ERROR)
        case ShellExecutionError():
            return int(ErrorCode.SHELL_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
