from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from sweep.core.clock import Clock, SystemClock
from sweep.core.config import SweepConfig, load_config
from sweep.core.errors import ErrorCode
from sweep.core.result import Err
from sweep.output.console import ConsoleProtocol, RichConsole
from sweep.platform.shell import ShellCommandService, ShellExecutor


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: SweepConfig
    console: ConsoleProtocol
    shell: ShellExecutor
    clock: Clock


def build_context(config_path: Path, *, verbose: bool = False) -> CLIContext:
    console = RichConsole(verbose=verbose)

    config_result = load_config(config_path)
    if isinstance(config_result, Err):
        error = config_result.error
        console.error(error.message)
        if error.hint:
            console.print(f"hint: {error.hint}")
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(
        config=config_result.value,
        console=console,
        shell=ShellCommandService(),
        clock=SystemClock(),
    )
