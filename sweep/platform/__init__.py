"""Process and shell execution layer."""

from .process import ProcessError, run
from .shell import (
    ShellCommand,
    ShellCommandService,
    ShellExecutionError,
    ShellExecutor,
    render_commands,
)

__all__ = [
    # process
    "ProcessError",
    "run",
    # shell
    "ShellCommand",
    "ShellCommandService",
    "ShellExecutionError",
    "ShellExecutor",
    "render_commands",
]
