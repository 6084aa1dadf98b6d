"""Shell command execution on deployment nodes.

Two entry points, matching how cleanup uses a node:

- ``query``: run a read-only script and return its output. Always executes,
  also in dry-run mode.
- ``act_or_simulate``: run mutating commands, or only log them when the
  deployment is a dry run.

Mutating commands are argv tuples, never pre-built strings. They are quoted
with ``shlex`` when rendered, so values discovered on the node (release
names) cannot inject shell syntax. Query scripts are built by callers with
``shlex.quote`` around every interpolated value.

Remote nodes are reached through the system ``ssh`` binary; local nodes run
``sh -c``.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from sweep.core.result import Err, Ok, Result
from sweep.platform.process import run as run_process

if TYPE_CHECKING:
    from sweep.core.deployment import Deployment, Node

__all__ = [
    "ShellCommand",
    "ShellCommandService",
    "ShellExecutionError",
    "ShellExecutor",
    "render_commands",
]

ShellCommand = tuple[str, ...]

_SSH_OPTIONS: tuple[str, ...] = ("-o", "BatchMode=yes")


@dataclass(frozen=True, slots=True)
class ShellExecutionError:
    """A query or mutation failed on the node (transport error or non-zero exit)."""

    message: str
    command: str
    returncode: int
    stderr: str = ""

    @property
    def hint(self) -> str | None:
        detail = self.stderr.strip()
        return detail or None


def render_commands(commands: Sequence[ShellCommand]) -> str:
    """Render argv tuples as one shell line, stopping at the first failure."""
    return " && ".join(shlex.join(command) for command in commands)


class ShellExecutor(Protocol):
    def query(
        self, script: str, node: Node, deployment: Deployment
    ) -> Result[str, ShellExecutionError]: ...

    def act_or_simulate(
        self, commands: Sequence[ShellCommand], node: Node, deployment: Deployment
    ) -> Result[None, ShellExecutionError]: ...


class ShellCommandService:
    """``ShellExecutor`` backed by ``sh`` (local) and ``ssh`` (remote)."""

    def __init__(
        self,
        *,
        timeout: float | None = None,
        ssh_options: tuple[str, ...] = _SSH_OPTIONS,
    ) -> None:
        self._timeout = timeout
        self._ssh_options = ssh_options

    def argv(self, script: str, node: Node) -> list[str]:
        """Build the local argv that runs ``script`` on ``node``."""
        if node.is_local:
            return ["sh", "-c", script]
        cmd = ["ssh", *self._ssh_options]
        if node.port is not None:
            cmd.extend(["-p", str(node.port)])
        cmd.extend([node.ssh_target, script])
        return cmd

    def query(
        self, script: str, node: Node, deployment: Deployment
    ) -> Result[str, ShellExecutionError]:
        deployment.logger.debug(f"[{node.name}] $ {script}")
        result = run_process(self.argv(script, node), timeout=self._timeout)
        if isinstance(result, Err):
            e = result.error
            return Err(
                ShellExecutionError(
                    message=f"command failed on {node.name} (exit {e.returncode})",
                    command=script,
                    returncode=e.returncode,
                    stderr=e.stderr,
                )
            )
        return Ok(result.value)

    def act_or_simulate(
        self, commands: Sequence[ShellCommand], node: Node, deployment: Deployment
    ) -> Result[None, ShellExecutionError]:
        if not commands:
            return Ok(None)
        script = render_commands(commands)
        if deployment.dry_run:
            deployment.logger.debug(f"[{node.name}] would run: {script}")
            return Ok(None)
        return self.query(script, node, deployment).map(lambda _: None)
